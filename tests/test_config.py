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

# pylint: disable=missing-function-docstring, missing-module-docstring
# mypy: disable-error-code=no-untyped-def


from aws_messaging import config


def test_from_environment_defaults(monkeypatch):
    for name in (
        'AWS_REGION',
        'RECEIVE_MESSAGE_WAIT_SECONDS',
        'MAX_NUMBER_OF_MESSAGES',
        'RETRY_ATTEMPTS',
        'RETRY_WAIT_BASE_SECONDS',
    ):
        monkeypatch.delenv(name, raising=False)

    assert config._from_environment() == {  # pylint: disable=protected-access
        'region': None,
        'receive_message_wait_seconds': 20,
        'max_number_of_messages': 10,
        'retry_attempts': 3,
        'retry_wait_base_seconds': 1.0,
    }


def test_from_environment_overrides(monkeypatch):
    monkeypatch.setenv('AWS_REGION', 'eu-west-1')
    monkeypatch.setenv('RECEIVE_MESSAGE_WAIT_SECONDS', '5')
    monkeypatch.setenv('MAX_NUMBER_OF_MESSAGES', '1')
    monkeypatch.setenv('RETRY_ATTEMPTS', '7')
    monkeypatch.setenv('RETRY_WAIT_BASE_SECONDS', '0.25')

    assert config._from_environment() == {  # pylint: disable=protected-access
        'region': 'eu-west-1',
        'receive_message_wait_seconds': 5,
        'max_number_of_messages': 1,
        'retry_attempts': 7,
        'retry_wait_base_seconds': 0.25,
    }
