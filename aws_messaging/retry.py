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
Retry module for repeating throttled AWS calls.

An operation is executed and, if it fails with an error classified as
throttling, retried up to a configured number of additional times. Any other
error is raised immediately. When all retries are used up the last throttling
error is raised.

Two wait strategies are supported:
    - Constant: the base wait before every retry.
    - Exponential: for the i-th retry, base * 2^i rounded to the millisecond,
      then scaled by a uniform random factor in [0, 1). Waits are therefore
      randomly damped and not monotonically increasing.

Usage:
    >>> from aws_messaging.retry import retry, with_exponential_backoff
    >>> retry(publisher.publish, 'hello', with_exponential_backoff(5, 0.1))
'''

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from tenacity import (
    Retrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)
from tenacity.wait import wait_base

from .config import CONFIG
from .exceptions import is_throttled

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_ATTEMPTS: int = CONFIG['retry_attempts']
DEFAULT_WAIT_BASE: float = CONFIG['retry_wait_base_seconds']


class BackoffMode(Enum):
    CONSTANT = 'constant'
    EXPONENTIAL = 'exponential'


DEFAULT_BACKOFF = BackoffMode.CONSTANT


@dataclass
class RetryConfig:
    '''
    Retry settings for a single call.

    Attributes:
        attempts: Number of retries after the first execution. 0 means a single execution.
        wait_base: Base wait between executions, in seconds.
        backoff: Wait strategy.
    '''

    attempts: int = field(default=DEFAULT_ATTEMPTS)
    wait_base: float = field(default=DEFAULT_WAIT_BASE)
    backoff: BackoffMode = field(default=DEFAULT_BACKOFF)

    def defaults(self) -> None:
        self.attempts = DEFAULT_ATTEMPTS
        self.wait_base = DEFAULT_WAIT_BASE
        self.backoff = DEFAULT_BACKOFF


Option = Callable[[RetryConfig], None]


def with_exponential_backoff(attempts: int, wait_base: float) -> Option:
    def option(config: RetryConfig) -> None:
        config.backoff = BackoffMode.EXPONENTIAL
        config.attempts = attempts
        config.wait_base = wait_base

    return option


def with_constant(attempts: int, wait_base: float) -> Option:
    def option(config: RetryConfig) -> None:
        config.backoff = BackoffMode.CONSTANT
        config.attempts = attempts
        config.wait_base = wait_base

    return option


class wait_damped_exponential(wait_base):  # pylint: disable=invalid-name
    '''
    Exponential wait scaled down by a random factor.

    Named in lower case to match the tenacity wait strategies it is used with.
    '''

    def __init__(self, base: float, rng: Optional[random.Random] = None) -> None:
        self.base = base
        self.rng = rng if rng is not None else random.Random()

    def __call__(self, retry_state: RetryCallState) -> float:
        # attempt_number counts executions so far, i.e. the index of the upcoming retry
        wait = round(self.base * 2**retry_state.attempt_number, 3)
        return wait * self.rng.random()


def _wait_strategy(config: RetryConfig, rng: Optional[random.Random]) -> wait_base:
    if config.backoff is BackoffMode.EXPONENTIAL:
        return wait_damped_exponential(config.wait_base, rng)

    return wait_fixed(config.wait_base)


def default_retry(
    function: Callable[[], T],
    *options: Option,
    is_retryable: Callable[[BaseException], bool] = is_throttled,
    rng: Optional[random.Random] = None,
    sleep: Optional[Callable[[float], Any]] = None,
) -> T:
    '''
    Execute a function, retrying it while it fails with a retryable error.

    Args:
        function: Zero argument callable to execute.
        *options: Options applied in order on top of the default RetryConfig.
        is_retryable: Predicate deciding whether an error is transient.
            Defaults to the AWS throttling check.
        rng: Random source for the exponential jitter.
        sleep: Function used to wait between executions. Defaults to time.sleep.

    Returns:
        The return value of the first successful execution.

    Raises:
        Exception: The first non-retryable error, or the last retryable error
            once all attempts are exhausted.
    '''
    config = RetryConfig()
    config.defaults()

    for option in options:
        option(config)

    retrying = Retrying(
        stop=stop_after_attempt(max(config.attempts, 0) + 1),
        wait=_wait_strategy(config, rng),
        retry=retry_if_exception(is_retryable),
        sleep=sleep if sleep is not None else time.sleep,
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

    return retrying(function)


def retry(
    publish_func: Callable[[str], T], message: str, *options: Option, **kwargs: Any
) -> T:
    '''
    Publish a message, retrying throttled attempts.

    Args:
        publish_func: Publish callable taking the message.
        message: The message to publish.
        *options: Retry options, e.g. with_constant(3, 1.0).
        **kwargs: Passed through to default_retry.
    '''
    return default_retry(lambda: publish_func(message), *options, **kwargs)


def retry_with_attributes(
    publish_func: Callable[[str, Dict[str, str]], T],
    message: str,
    attributes: Dict[str, str],
    *options: Option,
    **kwargs: Any,
) -> T:
    '''
    Publish a message with attributes, retrying throttled attempts.

    Args:
        publish_func: Publish callable taking the message and its attributes.
        message: The message to publish.
        attributes: String message attributes.
        *options: Retry options.
        **kwargs: Passed through to default_retry.
    '''
    return default_retry(lambda: publish_func(message, attributes), *options, **kwargs)
