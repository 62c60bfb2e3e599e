# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# pylint: disable=missing-function-docstring, missing-module-docstring, redefined-outer-name
# mypy: disable-error-code=no-untyped-def


import json
from unittest.mock import Mock

from botocore.exceptions import ClientError
import pytest

from aws_messaging.queue_publisher import QueuePublisher
from aws_messaging.retry import with_constant
from aws_messaging.topic_publisher import TopicPublisher
from aws_messaging.topics_publisher import TopicsPublisher

from conftest import throttled_error

QUEUE_NAME = 'test-queue'
TOPIC_NAME = 'test-topic'
TOPIC_ARN = f'arn:aws:sns:us-east-1:123456789012:{TOPIC_NAME}'
QUEUE_URL = f'https://sqs.us-east-1.amazonaws.com/123456789012/{QUEUE_NAME}'


def no_sleep(_):
    return None


@pytest.fixture
def queue_url(sqs_client):
    return sqs_client.create_queue(QueueName=QUEUE_NAME)['QueueUrl']


@pytest.fixture
def mock_sqs_wrapper():
    sqs_wrapper = Mock()
    sqs_wrapper.get_queue_url.return_value = QUEUE_URL
    return sqs_wrapper


@pytest.fixture
def mock_sns_wrapper():
    sns_wrapper = Mock()
    sns_wrapper.create_topic.return_value = TOPIC_ARN
    sns_wrapper.publish.return_value = 'message-id'
    return sns_wrapper


def receive_one(sqs_client, queue_url):
    response = sqs_client.receive_message(
        QueueUrl=queue_url, MessageAttributeNames=['All'], WaitTimeSeconds=0
    )
    assert len(response['Messages']) == 1
    return response['Messages'][0]


def test_queue_publisher_resolves_url(sqs_wrapper, queue_url):
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=sqs_wrapper)

    assert publisher.queue_url == queue_url


def test_queue_publisher_for_missing_queue_raises(sqs_wrapper):
    with pytest.raises(ClientError):
        QueuePublisher('nonexistent', sqs_wrapper=sqs_wrapper)


def test_queue_publisher_publish(sqs_client, sqs_wrapper, queue_url):
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=sqs_wrapper)

    message_id = publisher.publish('test message')

    message = receive_one(sqs_client, queue_url)
    assert message['MessageId'] == message_id
    assert message['Body'] == 'test message'


def test_queue_publisher_publish_with_attributes(sqs_client, sqs_wrapper, queue_url):
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=sqs_wrapper)

    publisher.publish_with_attributes('test message', {'event': 'created'})

    message = receive_one(sqs_client, queue_url)
    assert message['MessageAttributes'] == {
        'event': {'StringValue': 'created', 'DataType': 'String'}
    }


def test_queue_publisher_publish_with_retry(mock_sqs_wrapper):
    mock_sqs_wrapper.send_message.side_effect = [
        throttled_error('SendMessage'),
        throttled_error('SendMessage'),
        'message-id',
    ]
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=mock_sqs_wrapper)

    result = publisher.publish_with_retry('test message', with_constant(3, 0), sleep=no_sleep)

    assert result == 'message-id'
    assert mock_sqs_wrapper.send_message.call_count == 3


def test_queue_publisher_publish_with_attributes_with_retry(mock_sqs_wrapper):
    mock_sqs_wrapper.send_message.side_effect = [throttled_error('SendMessage'), 'message-id']
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=mock_sqs_wrapper)

    result = publisher.publish_with_attributes_with_retry(
        'test message', {'event': 'created'}, with_constant(1, 0), sleep=no_sleep
    )

    assert result == 'message-id'
    mock_sqs_wrapper.send_message.assert_called_with(
        QUEUE_URL, 'test message', attributes={'event': 'created'}
    )


def test_queue_publisher_retry_gives_up_after_attempts(mock_sqs_wrapper):
    mock_sqs_wrapper.send_message.side_effect = throttled_error('SendMessage')
    publisher = QueuePublisher(QUEUE_NAME, sqs_wrapper=mock_sqs_wrapper)

    with pytest.raises(ClientError):
        publisher.publish_with_retry('test message', with_constant(2, 0), sleep=no_sleep)

    assert mock_sqs_wrapper.send_message.call_count == 3


def test_topic_publisher_resolves_arn(mock_sns_wrapper):
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    assert publisher.topic_arn == TOPIC_ARN
    mock_sns_wrapper.create_topic.assert_called_once_with(TOPIC_NAME)


def test_topic_publisher_publish(mock_sns_wrapper):
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    assert publisher.publish('test message') == 'message-id'
    mock_sns_wrapper.publish.assert_called_once_with(TOPIC_ARN, 'test message')


def test_topic_publisher_publish_with_attributes(mock_sns_wrapper):
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    publisher.publish_with_attributes('test message', {'event': 'created'})

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', attributes={'event': 'created'}
    )


def test_topic_publisher_publish_event_uses_topic_name_as_subject(mock_sns_wrapper):
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    publisher.publish_event('test message')

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', subject=TOPIC_NAME
    )


def test_topic_publisher_publish_event_with_attributes(mock_sns_wrapper):
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    publisher.publish_event_with_attributes('test message', {'event': 'created'})

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', subject=TOPIC_NAME, attributes={'event': 'created'}
    )


def test_topic_publisher_publish_event_with_retry(mock_sns_wrapper):
    mock_sns_wrapper.publish.side_effect = [throttled_error(), throttled_error(), 'message-id']
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    result = publisher.publish_event_with_retry('test message', with_constant(3, 0), sleep=no_sleep)

    assert result == 'message-id'
    assert mock_sns_wrapper.publish.call_count == 3


def test_topic_publisher_does_not_retry_other_errors(mock_sns_wrapper):
    mock_sns_wrapper.publish.side_effect = ClientError(
        {'Error': {'Code': 'AuthorizationError', 'Message': 'denied'}}, 'Publish'
    )
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=mock_sns_wrapper)

    with pytest.raises(ClientError):
        publisher.publish_with_retry('test message', with_constant(3, 0), sleep=no_sleep)

    assert mock_sns_wrapper.publish.call_count == 1


def test_topic_publisher_publish_to_subscribed_queue(sns_client, sqs_client, sns_wrapper, queue_url):
    topic_arn = sns_client.create_topic(Name=TOPIC_NAME)['TopicArn']
    queue_arn = sqs_client.get_queue_attributes(QueueUrl=queue_url, AttributeNames=['QueueArn'])[
        'Attributes'
    ]['QueueArn']
    sns_client.subscribe(TopicArn=topic_arn, Protocol='sqs', Endpoint=queue_arn)
    publisher = TopicPublisher(TOPIC_NAME, sns_wrapper=sns_wrapper)

    publisher.publish_event('test message')

    notification = json.loads(receive_one(sqs_client, queue_url)['Body'])
    assert notification['Subject'] == TOPIC_NAME
    assert notification['Message'] == 'test message'


def test_topics_publisher_caches_topic_arns(mock_sns_wrapper):
    publisher = TopicsPublisher(sns_wrapper=mock_sns_wrapper)

    publisher.publish(TOPIC_NAME, 'first')
    publisher.publish(TOPIC_NAME, 'second')

    mock_sns_wrapper.create_topic.assert_called_once_with(TOPIC_NAME)
    assert publisher.topics_cache == {TOPIC_NAME: TOPIC_ARN}


def test_topics_publisher_publish_event(mock_sns_wrapper):
    publisher = TopicsPublisher(sns_wrapper=mock_sns_wrapper)

    publisher.publish_event(TOPIC_NAME, 'order-created', 'test message')

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', subject='order-created'
    )


def test_topics_publisher_publish_event_with_attributes(mock_sns_wrapper):
    publisher = TopicsPublisher(sns_wrapper=mock_sns_wrapper)

    publisher.publish_event_with_attributes(
        TOPIC_NAME, 'order-created', 'test message', {'event': 'created'}
    )

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', subject='order-created', attributes={'event': 'created'}
    )


def test_topics_publisher_publish_with_attributes(mock_sns_wrapper):
    publisher = TopicsPublisher(sns_wrapper=mock_sns_wrapper)

    publisher.publish_with_attributes(TOPIC_NAME, 'test message', {'event': 'created'})

    mock_sns_wrapper.publish.assert_called_once_with(
        TOPIC_ARN, 'test message', attributes={'event': 'created'}
    )
