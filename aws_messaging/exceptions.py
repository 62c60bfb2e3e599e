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
Custom exceptions and error classification for SQS/SNS messaging.

This module defines the exception types raised by the library and the
predicate used to tell transient throttling errors apart from terminal ones.
AWS service errors themselves are not wrapped: they surface as
botocore's ClientError and are propagated to the caller uninterpreted.
'''

from __future__ import annotations

from botocore.exceptions import ClientError

# Error codes AWS uses to signal request rate limiting.
# SNS exposes ThrottledException with the 'Throttled' code.
THROTTLING_ERROR_CODES = frozenset(
    (
        'Throttled',
        'ThrottledException',
        'Throttling',
        'ThrottlingException',
        'RequestThrottled',
    )
)


class MessagingException(Exception):
    '''
    Base class for all exceptions raised by this library.
    '''


class ValidationException(MessagingException, ValueError):
    '''
    Exception raised when caller input is rejected before any AWS call is made.

    Raised for:
    - Queue names that are empty, too long or contain invalid characters
    - Receive wait times outside of [0, 20] seconds
    - Missing required resource tags

    Validation errors are never retried and never logged by the library.
    '''


class MissingTagsException(ValidationException):
    '''
    Exception raised when a queue or topic is created without the required tags.
    '''


class UnprocessableMessageException(MessagingException):
    '''
    Exception raised when a received message cannot be routed to a handler.

    For example:
    - The message body is not a JSON object
    - No handler is registered for the message subject

    The listener treats it like any other handler failure: the message is
    logged and left on the queue, so it is redelivered after the visibility
    timeout and eventually moved to the dead-letter queue.
    '''


def is_throttled(error: BaseException) -> bool:
    '''
    Check whether an error is a transient rate-limit signal from AWS.

    Args:
        error: The exception raised by an AWS call.

    Returns:
        True if the error is a ClientError carrying a throttling error code.
    '''
    if not isinstance(error, ClientError):
        return False

    return error.response.get('Error', {}).get('Code') in THROTTLING_ERROR_CODES
