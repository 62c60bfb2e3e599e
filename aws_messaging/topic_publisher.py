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
Topic publisher module for publishing messages to a single SNS topic.

Besides plain publishing, the publisher can publish "events": messages whose
subject is the topic name. Queues subscribed to several topics can then route
them with a MultiTopicHandler. Every publish method has a *_with_retry variant
that retries throttled requests.
'''

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import CONFIG
from .retry import Option, retry, retry_with_attributes
from .sns_wrapper import SnsWrapper
from .topic_setup import get_topic_arn


class TopicPublisher:
    '''
    Publisher bound to one SNS topic.

    Attributes:
        topic_name: Name of the topic.
        topic_arn: ARN of the topic, resolved when the publisher is created.
    '''

    def __init__(
        self,
        topic_name: str,
        region: Optional[str] = None,
        sns_wrapper: Optional[SnsWrapper] = None,
    ) -> None:
        self.sns_wrapper = sns_wrapper or SnsWrapper(region or CONFIG['region'])
        self.topic_name = topic_name
        self.topic_arn = get_topic_arn(self.sns_wrapper, topic_name)

    def publish(self, message: str) -> str:
        return self.sns_wrapper.publish(self.topic_arn, message)

    def publish_with_attributes(self, message: str, attributes: Dict[str, str]) -> str:
        return self.sns_wrapper.publish(self.topic_arn, message, attributes=attributes)

    def publish_event(self, message: str) -> str:
        '''
        Publish a message with the topic name as its subject.

        Args:
            message: The message to publish.

        Returns:
            The ID of the published message.
        '''
        return self.sns_wrapper.publish(self.topic_arn, message, subject=self.topic_name)

    def publish_event_with_attributes(self, message: str, attributes: Dict[str, str]) -> str:
        return self.sns_wrapper.publish(
            self.topic_arn, message, subject=self.topic_name, attributes=attributes
        )

    def publish_with_retry(self, message: str, *options: Option, **kwargs: Any) -> str:
        return retry(self.publish, message, *options, **kwargs)

    def publish_with_attributes_with_retry(
        self, message: str, attributes: Dict[str, str], *options: Option, **kwargs: Any
    ) -> str:
        return retry_with_attributes(
            self.publish_with_attributes, message, attributes, *options, **kwargs
        )

    def publish_event_with_retry(self, message: str, *options: Option, **kwargs: Any) -> str:
        return retry(self.publish_event, message, *options, **kwargs)

    def publish_event_with_attributes_with_retry(
        self, message: str, attributes: Dict[str, str], *options: Option, **kwargs: Any
    ) -> str:
        return retry_with_attributes(
            self.publish_event_with_attributes, message, attributes, *options, **kwargs
        )
