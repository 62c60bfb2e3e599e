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
Manager module for setting up queues, topics and subscriptions.

The Manager validates its inputs, then delegates to the queue and topic setup
modules. All AWS errors are propagated to the caller unchanged.
'''

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .config import CONFIG
from .queue_setup import (
    QueueConfig,
    setup_new_queue,
    validate_queue_name,
    validate_receive_wait_time_seconds,
)
from .sns_wrapper import SnsWrapper
from .sqs_wrapper import SqsWrapper
from .tagging import create_topic_tags
from .topic_setup import get_policy_content, get_topic_arn, set_topic_policy


class Manager:
    '''
    Setup operations for SQS queues and SNS topics.

    Attributes:
        sqs_wrapper: Wrapper for SQS operations.
        sns_wrapper: Wrapper for SNS operations.
    '''

    def __init__(
        self,
        region: Optional[str] = None,
        sqs_wrapper: Optional[SqsWrapper] = None,
        sns_wrapper: Optional[SnsWrapper] = None,
    ) -> None:
        region = region or CONFIG['region']
        self.sqs_wrapper = sqs_wrapper or SqsWrapper(region)
        self.sns_wrapper = sns_wrapper or SnsWrapper(region)

    def create_queue(self, queue_name: str, config: QueueConfig) -> str:
        '''
        Create a queue and its dead-letter queue.

        Args:
            queue_name: Name of the queue.
            config: Queue settings.

        Returns:
            The URL of the created queue.

        Raises:
            ValidationException: If the name, the wait time or the tags are invalid.
            ClientError: If SQS rejects a request.
        '''
        validate_queue_name(queue_name)
        validate_receive_wait_time_seconds(config.receive_wait_time_seconds)

        return setup_new_queue(self.sqs_wrapper, queue_name, config)

    def create_topic(self, topic_name: str, tags: Dict[str, str]) -> str:
        '''
        Create a tagged topic.

        Returns:
            The ARN of the topic. If it already exists, its ARN is returned.

        Raises:
            MissingTagsException: If required tags are missing.
        '''
        topic_tags = create_topic_tags(tags)
        return self.sns_wrapper.create_topic(topic_name, topic_tags)

    def get_topic_arn(self, topic_name: str) -> str:
        return get_topic_arn(self.sns_wrapper, topic_name)

    def get_queue_arn(self, queue_name: str) -> str:
        queue_url = self.sqs_wrapper.get_queue_url(queue_name)
        return self.sqs_wrapper.get_queue_arn(queue_url)

    def subscribe_queue_to_topic(self, queue_name: str, topic_name: str, raw: bool) -> None:
        '''
        Subscribe a queue to a topic and allow the topic to send to the queue.

        Args:
            queue_name: Name of the subscribed queue.
            topic_name: Name of the topic.
            raw: Enable raw message delivery. Without it, SNS wraps every
                message in a JSON notification envelope.
        '''
        topic_arn, queue_url = self._subscribe(queue_name, topic_name, raw)

        policy = get_policy_content(self.sqs_wrapper, queue_url, topic_arn)
        set_topic_policy(self.sqs_wrapper, queue_url, policy)

    def subscribe_queue_to_topic_without_policy(
        self, queue_name: str, topic_name: str, raw: bool
    ) -> None:
        '''
        Subscribe a queue to a topic, leaving the queue policy untouched.

        Use this when the queue policy is managed elsewhere.
        '''
        self._subscribe(queue_name, topic_name, raw)

    def _subscribe(self, queue_name: str, topic_name: str, raw: bool) -> Tuple[str, str]:
        topic_arn = get_topic_arn(self.sns_wrapper, topic_name)
        queue_url = self.sqs_wrapper.get_queue_url(queue_name)
        queue_arn = self.sqs_wrapper.get_queue_arn(queue_url)

        self.sns_wrapper.subscribe(
            topic_arn,
            'sqs',
            queue_arn,
            {'RawMessageDelivery': 'true' if raw else 'false'},
        )

        return topic_arn, queue_url
