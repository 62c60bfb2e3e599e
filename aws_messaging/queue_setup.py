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
Queue setup module for creating queues with a dead-letter queue.

Every queue created through this module gets a companion dead-letter queue
named after it with the ERROR_QUEUE_SUFFIX. Messages that are received more
than max_receive_count times without being deleted are moved there by SQS.
'''

from __future__ import annotations

from dataclasses import dataclass, field
import json
import re
from typing import Dict

from .exceptions import ValidationException
from .sqs_wrapper import SqsWrapper
from .tagging import create_queue_tags

ERROR_QUEUE_SUFFIX = '_ERROR'

MAX_QUEUE_NAME_LENGTH = 80
# The dead-letter queue name must fit in the SQS limit too
MAX_BASE_QUEUE_NAME_LENGTH = MAX_QUEUE_NAME_LENGTH - len(ERROR_QUEUE_SUFFIX)
MAX_RECEIVE_WAIT_TIME_SECONDS = 20
QUEUE_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')

ERR_QUEUE_NAME_TOO_LONG = 'queue name is too long'
ERR_NON_ALPHANUMERIC_CHARS_IN_QUEUE_NAME = 'queue name contains non alphanumeric characters'
ERR_QUEUE_NAME_EMPTY = 'queue name cannot be empty'
ERR_WAIT_TIME_MORE_THAN_20 = 'wait time cannot be more than 20'
ERR_WAIT_TIME_NEGATIVE = 'wait time cannot be less than 0'


@dataclass
class QueueConfig:
    '''
    Settings for a new queue and its dead-letter queue.

    Attributes:
        tags: Resource tags. All tagging.REQUIRED_TAGS must be present.
        receive_wait_time_seconds: Default long polling wait, 0 to 20.
            Set to 20 if not sure, it enables long polling.
        max_receive_count: Receives before a message is moved to the dead-letter queue.
        delay_seconds: Delivery delay of new messages.
        max_message_retention_period: Message retention, in seconds.
        default_visibility_timeout: Visibility timeout of received messages, in seconds.
    '''

    tags: Dict[str, str] = field(default_factory=dict)
    receive_wait_time_seconds: int = 20
    max_receive_count: int = 5
    delay_seconds: int = 0
    max_message_retention_period: int = 345600
    default_visibility_timeout: int = 30


def validate_queue_name(queue_name: str) -> None:
    '''
    Check that a queue name is accepted by SQS.

    The limit leaves room for ERROR_QUEUE_SUFFIX, so the dead-letter queue
    name is valid as well.

    Raises:
        ValidationException: If the name is too long, empty or has invalid characters.
    '''
    if len(queue_name) > MAX_BASE_QUEUE_NAME_LENGTH:
        raise ValidationException(ERR_QUEUE_NAME_TOO_LONG)

    if not queue_name:
        raise ValidationException(ERR_QUEUE_NAME_EMPTY)

    if not QUEUE_NAME_PATTERN.match(queue_name):
        raise ValidationException(ERR_NON_ALPHANUMERIC_CHARS_IN_QUEUE_NAME)


def validate_receive_wait_time_seconds(receive_wait_time_seconds: int) -> None:
    if receive_wait_time_seconds > MAX_RECEIVE_WAIT_TIME_SECONDS:
        raise ValidationException(ERR_WAIT_TIME_MORE_THAN_20)

    if receive_wait_time_seconds < 0:
        raise ValidationException(ERR_WAIT_TIME_NEGATIVE)


def create_queue(sqs_wrapper: SqsWrapper, queue_name: str, config: QueueConfig) -> str:
    '''
    Create a single queue from a QueueConfig.

    Args:
        sqs_wrapper: The SQS wrapper to use.
        queue_name: Name of the queue.
        config: Queue settings.

    Returns:
        The URL of the queue.

    Raises:
        MissingTagsException: If required tags are missing.
        ClientError: If SQS rejects the request.
    '''
    tags = create_queue_tags(config.tags)
    attributes = {
        'ReceiveMessageWaitTimeSeconds': str(config.receive_wait_time_seconds),
        'DelaySeconds': str(config.delay_seconds),
        'MessageRetentionPeriod': str(config.max_message_retention_period),
        'VisibilityTimeout': str(config.default_visibility_timeout),
    }

    return sqs_wrapper.create_queue(queue_name, attributes, tags)


def set_up_dead_letter_queue(
    sqs_wrapper: SqsWrapper, queue_url: str, dlq_url: str, max_receive_count: int
) -> None:
    '''
    Attach a dead-letter queue to a queue through its redrive policy.
    '''
    dlq_arn = sqs_wrapper.get_queue_arn(dlq_url)
    policy = {
        'deadLetterTargetArn': dlq_arn,
        'maxReceiveCount': str(max_receive_count),
    }

    sqs_wrapper.set_queue_attributes(queue_url, {'RedrivePolicy': json.dumps(policy)})


def setup_new_queue(sqs_wrapper: SqsWrapper, queue_name: str, config: QueueConfig) -> str:
    '''
    Create a queue together with its dead-letter queue.

    The dead-letter queue is named queue_name + ERROR_QUEUE_SUFFIX and is
    created with the same config.

    Args:
        sqs_wrapper: The SQS wrapper to use.
        queue_name: Name of the queue.
        config: Settings of both queues.

    Returns:
        The URL of the main queue.

    Raises:
        ValidationException: If the name is invalid. Nothing is created then.
    '''
    validate_queue_name(queue_name)

    queue_url = create_queue(sqs_wrapper, queue_name, config)
    dlq_url = create_queue(sqs_wrapper, queue_name + ERROR_QUEUE_SUFFIX, config)
    set_up_dead_letter_queue(sqs_wrapper, queue_url, dlq_url, config.max_receive_count)

    return queue_url
