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
Multi-topic handler module for routing messages by subject.

A queue subscribed to several SNS topics receives notifications from all of
them. This module provides the MultiTopicHandler, which reads the subject of
each message and dispatches the inner message to the handler registered for
that subject.
'''

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

from .exceptions import UnprocessableMessageException
from .handler import MessageHandler
from .message import Message

logger = logging.getLogger(__name__)

EventHandler = Callable[[str], Any]


class MultiTopicHandler(MessageHandler):
    '''
    Message handler that dispatches on the subject embedded in the message body.

    The body is expected to be a JSON object with a subject and a message:

        {"subject": "order-created", "message": "..."}

    Keys are matched case-insensitively, so the notification envelope SNS
    wraps around non-raw deliveries ({"Subject": ..., "Message": ...}) is
    routed as well. TopicPublisher.publish_event() sets the subject to the
    topic name, which makes the subject identify the source topic.

    Attributes:
        handlers: Dict mapping subjects to the handlers registered for them.

    Example:
        handler = MultiTopicHandler()
        handler.register_handler('order-created', on_order_created)
        handler.register_handler('order-cancelled', on_order_cancelled)
    '''

    def __init__(self) -> None:
        self.handlers: Dict[str, EventHandler] = {}

    def register_handler(self, subject: str, handler_func: EventHandler) -> None:
        '''
        Register a handler for a subject, replacing any previous one.

        Args:
            subject: The subject to route on.
            handler_func: Callable invoked with the inner message string.
        '''
        self.handlers[subject] = handler_func

    @staticmethod
    def _get_field(event: dict, name: str) -> Optional[Any]:
        if name in event:
            return event[name]

        for key, value in event.items():
            if key.lower() == name:
                return value

        return None

    def _get_string_field(self, event: dict, name: str, message: Message) -> str:
        value = self._get_field(event, name)
        if value is None:
            return ''

        if not isinstance(value, str):
            raise UnprocessableMessageException(
                f'Field {name} of message {message.message_id} is not a string: {value!r}'
            )

        return value

    def handle(self, message: Message) -> None:
        '''
        Route a message to the handler registered for its subject.

        Args:
            message: The received message.

        Raises:
            UnprocessableMessageException: If the body is not a JSON object, its
                subject or message is not a string, or no handler is registered
                for its subject.
            Exception: Any error raised by the subject handler.
        '''
        logger.debug(f'Routing message {message.message_id}: {message.body}')
        try:
            event = json.loads(message.body)
        except ValueError as e:
            raise UnprocessableMessageException(
                f'Message body is not valid JSON: {message.body}'
            ) from e

        if not isinstance(event, dict):
            raise UnprocessableMessageException(f'Message body is not an object: {message.body}')

        subject = self._get_string_field(event, 'subject', message)
        handler_func = self.handlers.get(subject)
        if handler_func is None:
            raise UnprocessableMessageException(f'No handler for subject: {subject}')

        handler_func(self._get_string_field(event, 'message', message))
