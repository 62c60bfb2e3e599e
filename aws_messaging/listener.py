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
SQS listener module for polling a queue and dispatching messages to a handler.

The listener runs a poll loop on the calling thread. Every received message is
handled on its own thread and deleted from the queue once the handler returns.
Handler failures leave the message on the queue for redelivery. The loop stops
when the shared GracefulShutdownManager is signaled, after all in-flight
messages are finished.

Listener States:
    IDLE -> POLLING -> DISPATCHING -> POLLING ...
    POLLING -> DRAINING -> STOPPED

Usage:
    >>> shutdown_manager = GracefulShutdownManager()
    >>> shutdown_manager.install_signal_handlers()
    >>> listener = SqsListener('orders', ListenerConfig(
    ...     handler=OrderHandler(),
    ...     graceful_shutdown_manager=shutdown_manager,
    ... ))
    >>> listener.listen()  # Returns after SIGTERM once in-flight messages are done
'''

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import threading
from typing import Optional

from .config import CONFIG
from .handler import MessageHandler
from .message import Message
from .shutdown import GracefulShutdownManager
from .sqs_wrapper import SqsWrapper

logger = logging.getLogger(__name__)


class ListenerState(Enum):
    IDLE = 'idle'
    POLLING = 'polling'
    DISPATCHING = 'dispatching'
    DRAINING = 'draining'
    STOPPED = 'stopped'


@dataclass
class ListenerConfig:
    '''
    Settings for an SqsListener.

    Attributes:
        handler: Handler invoked once per received message.
        graceful_shutdown_manager: Shutdown coordinator, may be shared by several listeners.
        receive_message_wait_seconds: Long polling wait time of each receive call.
        max_number_of_messages: Maximum number of messages received per poll.
            It also bounds how many messages are handled concurrently per poll.
    '''

    handler: MessageHandler
    graceful_shutdown_manager: GracefulShutdownManager
    receive_message_wait_seconds: int = field(default=CONFIG['receive_message_wait_seconds'])
    max_number_of_messages: int = field(default=CONFIG['max_number_of_messages'])


class SqsListener:
    '''
    Poll loop dispatching SQS messages to a handler.

    Errors never escape listen(): failed receives are logged and retried
    immediately, failed handlers are logged and their messages left on the
    queue, failed deletes are logged and the messages reappear after the
    visibility timeout. Delivery is therefore at-least-once.

    A single listener must only be run by one thread at a time.

    Attributes:
        queue_name: Name of the polled queue.
        queue_url: URL of the polled queue, resolved at construction.
        state: Current ListenerState.
    '''

    def __init__(
        self,
        queue_name: str,
        listener_config: ListenerConfig,
        sqs_wrapper: Optional[SqsWrapper] = None,
        region: Optional[str] = None,
    ) -> None:
        '''
        Initialize the listener and resolve the queue URL.

        Args:
            queue_name: Name of the queue to poll.
            listener_config: Handler, shutdown manager and polling settings.
            sqs_wrapper: SQS wrapper to use. A new one is created if not set.
            region: AWS region used when creating the SQS wrapper.

        Raises:
            ClientError: If the queue URL cannot be resolved.
        '''
        self.sqs_wrapper = sqs_wrapper or SqsWrapper(region or CONFIG['region'])
        self.queue_name = queue_name
        self.queue_url = self.sqs_wrapper.get_queue_url(queue_name)

        self.handler = listener_config.handler
        self.graceful_shutdown_manager = listener_config.graceful_shutdown_manager
        self.receive_message_wait_seconds = listener_config.receive_message_wait_seconds
        self.max_number_of_messages = listener_config.max_number_of_messages

        self.state = ListenerState.IDLE

    def listen(self) -> None:
        '''
        Poll the queue until shutdown is signaled and all in-flight messages are handled.
        '''
        logger.info(f'Listening on queue {self.queue_name}')
        self._poll()
        logger.info(f'Stopped listening on queue {self.queue_name}')

    def _poll(self) -> None:
        while True:
            if self.graceful_shutdown_manager.is_signaled():
                self.state = ListenerState.DRAINING
                logger.info(
                    f'Draining queue {self.queue_name} listener, '
                    f'{self.graceful_shutdown_manager.active_tasks} messages in flight'
                )
                self.graceful_shutdown_manager.await_drain()
                self.state = ListenerState.STOPPED
                return

            self.state = ListenerState.POLLING
            try:
                messages = self.sqs_wrapper.receive_messages(
                    self.queue_url,
                    self.receive_message_wait_seconds,
                    self.max_number_of_messages,
                )
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error(f'Failed to receive messages from {self.queue_name}: {e}')
                continue

            if not messages:
                continue

            self.state = ListenerState.DISPATCHING
            for message in messages:
                self._dispatch(message)

    def _dispatch(self, message: Message) -> None:
        self.graceful_shutdown_manager.register_task()
        try:
            threading.Thread(
                target=self._run_task,
                args=(message,),
                name=f'{self.queue_name}-{message.message_id}',
            ).start()
        except Exception as e:  # pylint: disable=broad-exception-caught
            # The message is not deleted and will be redelivered
            self.graceful_shutdown_manager.complete_task()
            logger.error(f'Failed to dispatch message {message.message_id}: {e}')

    def _run_task(self, message: Message) -> None:
        try:
            self._handle_message(message)
        finally:
            self.graceful_shutdown_manager.complete_task()

    def _handle_message(self, message: Message) -> None:
        try:
            self.handler.handle(message)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f'Failed to handle message {message.message_id}: {message.body}')
            logger.error(f'Encountered exception while handling message: {e}')
            return

        try:
            self._delete_message(message)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f'Failed to delete message {message.message_id}: {e}')

    def _delete_message(self, message: Message) -> None:
        self.sqs_wrapper.delete_message(self.queue_url, message.receipt_handle)
        logger.debug(f'Deleted message {message.message_id} from {self.queue_name}')
