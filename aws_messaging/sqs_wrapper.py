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

'''
SQS wrapper module for simplified SQS operations.

This module provides a simplified interface for the SQS operations used by
the rest of the package: queue lookup and creation, queue attributes, and
sending, receiving and deleting messages.
'''

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from .message import Message


def to_message_attributes(attributes: Dict[str, str]) -> Dict[str, dict]:
    '''
    Convert plain string attributes to the SQS/SNS message attribute format.

    Args:
        attributes: Attribute names mapped to string values.

    Returns:
        The attributes in the {'DataType': 'String', 'StringValue': ...} form.
    '''
    return {
        key: {'DataType': 'String', 'StringValue': value} for key, value in attributes.items()
    }


class SqsWrapper:
    '''
    A wrapper class for SQS operations.

    The wrapped boto3 client is safe to share between threads, so a single
    wrapper can be used by a listener and all of its message handling tasks.

    Attributes:
        sqs_client: The boto3 SQS client.
    '''

    ClientException = ClientError

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        '''
        Initialize the SQS wrapper.

        Args:
            region: AWS region. If not set, boto3 resolves it from the environment.
            client: Optional preconfigured SQS client.
        '''
        self.sqs_client = client if client is not None else boto3.client('sqs', region_name=region)

    def get_queue_url(self, queue_name: str) -> str:
        '''
        Get the URL of a queue by name.

        Raises:
            ClientError: If the queue does not exist.
        '''
        response = self.sqs_client.get_queue_url(QueueName=queue_name)
        return response['QueueUrl']

    def create_queue(
        self, queue_name: str, attributes: Dict[str, str], tags: Dict[str, str]
    ) -> str:
        '''
        Create a queue.

        Args:
            queue_name: Name of the queue.
            attributes: Queue attributes, as strings.
            tags: Queue tags.

        Returns:
            The URL of the created queue.
        '''
        response = self.sqs_client.create_queue(
            QueueName=queue_name,
            Attributes=attributes,
            tags=tags,
        )
        return response['QueueUrl']

    def get_queue_attributes(self, queue_url: str, attribute_names: List[str]) -> Dict[str, str]:
        '''
        Get attributes of a queue.

        Args:
            queue_url: The URL of the queue.
            attribute_names: Names of the attributes to fetch.

        Returns:
            The attributes that are set on the queue. Unset attributes are absent.
        '''
        response = self.sqs_client.get_queue_attributes(
            QueueUrl=queue_url,
            AttributeNames=attribute_names,
        )
        return response.get('Attributes', {})

    def get_queue_arn(self, queue_url: str) -> str:
        return self.get_queue_attributes(queue_url, ['QueueArn'])['QueueArn']

    def set_queue_attributes(self, queue_url: str, attributes: Dict[str, str]) -> None:
        self.sqs_client.set_queue_attributes(QueueUrl=queue_url, Attributes=attributes)

    def send_message(
        self,
        queue_url: str,
        message: str | dict,
        attributes: Optional[Dict[str, str]] = None,
        message_group_id: Optional[str] = None,
    ) -> str:
        '''
        Send a message to an SQS queue.

        Args:
            queue_url: The URL of the SQS queue to send the message to.
            message: The message to send. Can be a string or any JSON-serializable object.
            attributes: Optional string message attributes.
            message_group_id: Message group ID for FIFO queues.

        Returns:
            The ID of the sent message.
        '''
        if not isinstance(message, str):
            message = json.dumps(message)

        kwargs: Dict[str, Any] = {
            'QueueUrl': queue_url,
            'MessageBody': message,
        }
        if attributes:
            kwargs['MessageAttributes'] = to_message_attributes(attributes)
        if message_group_id:
            kwargs['MessageGroupId'] = message_group_id

        response = self.sqs_client.send_message(**kwargs)
        return response['MessageId']

    def receive_messages(
        self, queue_url: str, wait_seconds: int, max_number_of_messages: int
    ) -> List[Message]:
        '''
        Receive a batch of messages from an SQS queue.

        The call long-polls for up to wait_seconds and requests all message
        attributes.

        Args:
            queue_url: The URL of the SQS queue.
            wait_seconds: Long polling wait time, between 0 and 20.
            max_number_of_messages: Maximum number of messages to return, between 1 and 10.

        Returns:
            The received messages. Empty if none arrived within the wait time.
        '''
        response = self.sqs_client.receive_message(
            QueueUrl=queue_url,
            WaitTimeSeconds=wait_seconds,
            MaxNumberOfMessages=max_number_of_messages,
            MessageAttributeNames=['All'],
        )
        return [Message.from_sqs(raw_message) for raw_message in response.get('Messages', [])]

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        '''
        Delete (acknowledge) a received message.

        Args:
            queue_url: The URL of the SQS queue.
            receipt_handle: The receipt handle of the received message.
        '''
        self.sqs_client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt_handle)
