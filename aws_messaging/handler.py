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
Message handler interface used by queue listeners.
'''

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from .message import Message


class MessageHandler(ABC):
    '''
    Abstract base class for handlers of received queue messages.

    The listener calls handle() once per received message, possibly from
    several threads at the same time. Returning normally acknowledges the
    message, which is then deleted from the queue. Raising any exception
    leaves the message on the queue so that it is redelivered, and eventually
    moved to the dead-letter queue by SQS.
    '''

    @abstractmethod
    def handle(self, message: Message) -> None:
        '''
        Handle a single received message.

        Args:
            message: The received message.

        Raises:
            Exception: If the message could not be handled.
        '''


class FunctionHandler(MessageHandler):  # pylint: disable=too-few-public-methods
    '''
    Adapter turning a plain callable into a MessageHandler.
    '''

    def __init__(self, function: Callable[[Message], Any]) -> None:
        self.function = function

    def handle(self, message: Message) -> None:
        self.function(message)
