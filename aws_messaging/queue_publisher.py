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
Queue publisher module for sending messages to a single SQS queue.
'''

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import CONFIG
from .retry import Option, retry, retry_with_attributes
from .sqs_wrapper import SqsWrapper


class QueuePublisher:
    '''
    Publisher bound to one SQS queue.

    The queue URL is resolved once, when the publisher is created.

    Attributes:
        queue_name: Name of the queue.
        queue_url: URL of the queue.
    '''

    def __init__(
        self,
        queue_name: str,
        region: Optional[str] = None,
        sqs_wrapper: Optional[SqsWrapper] = None,
    ) -> None:
        '''
        Initialize the publisher.

        Raises:
            ClientError: If the queue does not exist.
        '''
        self.sqs_wrapper = sqs_wrapper or SqsWrapper(region or CONFIG['region'])
        self.queue_name = queue_name
        self.queue_url = self.sqs_wrapper.get_queue_url(queue_name)

    def publish(self, message: str) -> str:
        return self.sqs_wrapper.send_message(self.queue_url, message)

    def publish_with_attributes(self, message: str, attributes: Dict[str, str]) -> str:
        return self.sqs_wrapper.send_message(self.queue_url, message, attributes=attributes)

    def publish_with_retry(self, message: str, *options: Option, **kwargs: Any) -> str:
        '''
        Send a message, retrying while SQS throttles the request.

        Args:
            message: The message to send.
            *options: Retry options, e.g. with_exponential_backoff(5, 0.1).
            **kwargs: Passed through to retry.default_retry.
        '''
        return retry(self.publish, message, *options, **kwargs)

    def publish_with_attributes_with_retry(
        self, message: str, attributes: Dict[str, str], *options: Option, **kwargs: Any
    ) -> str:
        return retry_with_attributes(
            self.publish_with_attributes, message, attributes, *options, **kwargs
        )
