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
Convenience layer over Amazon SQS and SNS.

This package wraps boto3 for the common messaging setup of a service: tagged
queues with dead-letter queues, topics, queue-to-topic subscriptions,
publishing with retries on throttling, and a listener that polls a queue and
dispatches messages to handlers with graceful shutdown.

Components:
    Manager - Creates queues, topics and subscriptions
    QueuePublisher / TopicPublisher / TopicsPublisher - Publish messages
    SqsListener - Polls a queue and dispatches messages to a MessageHandler
    GracefulShutdownManager - Stops listeners once in-flight messages are done
    MultiTopicHandler - Routes messages by subject
    retry - Retries throttled calls with constant or exponential waits

Usage:
    >>> from aws_messaging import (
    ...     GracefulShutdownManager, ListenerConfig, MultiTopicHandler, SqsListener,
    ... )
    >>> handler = MultiTopicHandler()
    >>> handler.register_handler('order-created', on_order_created)
    >>> shutdown_manager = GracefulShutdownManager()
    >>> shutdown_manager.install_signal_handlers()
    >>> SqsListener('orders', ListenerConfig(handler, shutdown_manager)).listen()
'''

from .exceptions import (
    MessagingException,
    MissingTagsException,
    UnprocessableMessageException,
    ValidationException,
    is_throttled,
)
from .handler import FunctionHandler, MessageHandler
from .listener import ListenerConfig, ListenerState, SqsListener
from .manager import Manager
from .message import Message
from .multi_topic_handler import MultiTopicHandler
from .queue_publisher import QueuePublisher
from .queue_setup import QueueConfig
from .retry import (
    BackoffMode,
    RetryConfig,
    default_retry,
    retry,
    retry_with_attributes,
    with_constant,
    with_exponential_backoff,
)
from .shutdown import GracefulShutdownManager
from .sns_wrapper import SnsWrapper
from .sqs_wrapper import SqsWrapper
from .topic_publisher import TopicPublisher
from .topics_publisher import TopicsPublisher

__all__ = [
    'BackoffMode',
    'FunctionHandler',
    'GracefulShutdownManager',
    'ListenerConfig',
    'ListenerState',
    'Manager',
    'Message',
    'MessageHandler',
    'MessagingException',
    'MissingTagsException',
    'MultiTopicHandler',
    'QueueConfig',
    'QueuePublisher',
    'RetryConfig',
    'SnsWrapper',
    'SqsListener',
    'SqsWrapper',
    'TopicPublisher',
    'TopicsPublisher',
    'UnprocessableMessageException',
    'ValidationException',
    'default_retry',
    'is_throttled',
    'retry',
    'retry_with_attributes',
    'with_constant',
    'with_exponential_backoff',
]
