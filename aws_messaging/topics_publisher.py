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
Topics publisher module for publishing to any SNS topic by name.
'''

from __future__ import annotations

import threading
from typing import Dict, Optional

from .config import CONFIG
from .sns_wrapper import SnsWrapper
from .topic_setup import get_topic_arn


class TopicsPublisher:
    '''
    Publisher for many SNS topics.

    Topic ARNs are looked up on first use and cached by topic name.

    Attributes:
        topics_cache: Dict mapping topic names to ARNs.
    '''

    def __init__(
        self, region: Optional[str] = None, sns_wrapper: Optional[SnsWrapper] = None
    ) -> None:
        self.sns_wrapper = sns_wrapper or SnsWrapper(region or CONFIG['region'])
        self.topics_cache: Dict[str, str] = {}
        self._cache_lock = threading.Lock()

    def publish(self, topic_name: str, message: str) -> str:
        return self.sns_wrapper.publish(self._get_topic_arn(topic_name), message)

    def publish_with_attributes(
        self, topic_name: str, message: str, attributes: Dict[str, str]
    ) -> str:
        return self.sns_wrapper.publish(
            self._get_topic_arn(topic_name), message, attributes=attributes
        )

    def publish_event(self, topic_name: str, subject: str, message: str) -> str:
        '''
        Publish a message with an explicit subject.

        Args:
            topic_name: Name of the topic.
            subject: Subject used by MultiTopicHandler for routing.
            message: The message to publish.

        Returns:
            The ID of the published message.
        '''
        return self.sns_wrapper.publish(self._get_topic_arn(topic_name), message, subject=subject)

    def publish_event_with_attributes(
        self, topic_name: str, subject: str, message: str, attributes: Dict[str, str]
    ) -> str:
        return self.sns_wrapper.publish(
            self._get_topic_arn(topic_name), message, subject=subject, attributes=attributes
        )

    def _get_topic_arn(self, topic_name: str) -> str:
        with self._cache_lock:
            topic_arn = self.topics_cache.get(topic_name)

        if topic_arn is None:
            topic_arn = get_topic_arn(self.sns_wrapper, topic_name)
            with self._cache_lock:
                self.topics_cache[topic_name] = topic_arn

        return topic_arn
