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

# pylint: disable=missing-function-docstring, missing-module-docstring, unused-argument, redefined-outer-name
# mypy: disable-error-code=no-untyped-def

from dataclasses import dataclass
import os

import boto3
from botocore.exceptions import ClientError
from moto import mock_aws
import pytest

from aws_messaging.sns_wrapper import SnsWrapper
from aws_messaging.sqs_wrapper import SqsWrapper

REGION = 'us-east-1'

REQUIRED_TAGS = {
    'env': 'test',
    'serviceName': 'orders',
    'serviceGroup': 'commerce',
    'businessUnit': 'retail',
    'ownerEmail': 'orders-team@example.com',
}


def throttled_error(operation_name: str = 'Publish') -> ClientError:
    return ClientError(
        {'Error': {'Code': 'Throttled', 'Message': 'Rate exceeded'}},
        operation_name,
    )


@dataclass
class Scenario:
    name: str

    def __str__(self):
        return self.name


@pytest.fixture()
def aws_setup():
    os.environ['AWS_DEFAULT_REGION'] = REGION
    with mock_aws():
        yield


@pytest.fixture()
def sqs_client(aws_setup):
    return boto3.client('sqs', region_name=REGION)


@pytest.fixture()
def sns_client(aws_setup):
    return boto3.client('sns', region_name=REGION)


@pytest.fixture()
def sqs_wrapper(sqs_client):
    return SqsWrapper(client=sqs_client)


@pytest.fixture()
def sns_wrapper(sns_client):
    return SnsWrapper(client=sns_client)
