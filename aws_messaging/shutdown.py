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
Graceful shutdown coordination for queue listeners.

A GracefulShutdownManager is shared between one or more listeners and the
message handling tasks they spawn. It holds a one-shot shutdown signal and a
counter of in-flight tasks. Listeners stop polling once the signal is set and
then wait until every in-flight task has completed.

There is no built-in shutdown timeout: a handler that never returns keeps
await_drain() blocked unless the caller passes a timeout.
'''

from __future__ import annotations

import logging
import signal as signal_module
import threading
from types import FrameType
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class GracefulShutdownManager:
    '''
    Shutdown signal and in-flight task counter shared by listeners.

    The signal is a broadcast: every listener sharing the manager observes it,
    and signaling more than once has no further effect.
    '''

    def __init__(self) -> None:
        self._shutdown_event = threading.Event()
        self._tasks_condition = threading.Condition()
        self._active_tasks = 0

    @property
    def active_tasks(self) -> int:
        with self._tasks_condition:
            return self._active_tasks

    def signal(self) -> None:
        '''
        Signal shutdown to every listener sharing this manager.
        '''
        if not self._shutdown_event.is_set():
            logger.info('Shutdown signaled')
        self._shutdown_event.set()

    def is_signaled(self) -> bool:
        return self._shutdown_event.is_set()

    def wait_for_signal(self, timeout: Optional[float] = None) -> bool:
        '''
        Block until shutdown is signaled.

        Args:
            timeout: Maximum time to wait, in seconds. None waits forever.

        Returns:
            True if the signal was set, False on timeout.
        '''
        return self._shutdown_event.wait(timeout)

    def register_task(self) -> None:
        with self._tasks_condition:
            self._active_tasks += 1

    def complete_task(self) -> None:
        '''
        Mark a registered task as finished.

        Raises:
            RuntimeError: If no task is registered.
        '''
        with self._tasks_condition:
            if self._active_tasks <= 0:
                raise RuntimeError('complete_task called without a registered task')

            self._active_tasks -= 1
            if self._active_tasks == 0:
                self._tasks_condition.notify_all()

    def await_drain(self, timeout: Optional[float] = None) -> bool:
        '''
        Block until no task is in flight.

        Must be called after signal(), otherwise listeners keep registering
        new tasks and the wait may never end.

        Args:
            timeout: Maximum time to wait, in seconds. None waits forever.

        Returns:
            True if all tasks completed, False on timeout.
        '''
        with self._tasks_condition:
            return self._tasks_condition.wait_for(lambda: self._active_tasks == 0, timeout)

    def install_signal_handlers(
        self,
        signals: Iterable[signal_module.Signals] = (signal_module.SIGINT, signal_module.SIGTERM),
    ) -> None:
        '''
        Signal shutdown when the process receives one of the given OS signals.

        Must be called from the main thread.

        Args:
            signals: The OS signals to handle. Defaults to SIGINT and SIGTERM.
        '''

        def handle_signal(signum: int, _: Optional[FrameType]) -> None:
            signal_name = signal_module.Signals(signum).name
            logger.info(f'Received {signal_name}, finishing in-flight messages')
            self.signal()

        for sig in signals:
            signal_module.signal(sig, handle_signal)
