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

# pylint: disable=missing-function-docstring, missing-module-docstring, redefined-outer-name
# mypy: disable-error-code=no-untyped-def


from dataclasses import dataclass
from typing import Dict, Optional

import pytest

from aws_messaging.exceptions import MissingTagsException, ValidationException
from aws_messaging.tagging import (
    ERR_MISSING_TAGS,
    OWNER_EMAIL,
    SERVICE_NAME,
    create_queue_tags,
    create_topic_tags,
    validate_tags,
)

from conftest import REQUIRED_TAGS, Scenario


def without(tag: str) -> Dict[str, str]:
    tags = dict(REQUIRED_TAGS)
    del tags[tag]
    return tags


@dataclass
class TagScenario(Scenario):
    tags: Optional[Dict[str, str]]
    expected_error: Optional[str] = None


TAG_SCENARIOS = [
    TagScenario(name='all_required_tags', tags=dict(REQUIRED_TAGS)),
    TagScenario(name='extra_tags_allowed', tags={**REQUIRED_TAGS, 'team': 'payments'}),
    TagScenario(name='none', tags=None, expected_error=ERR_MISSING_TAGS),
    TagScenario(name='empty', tags={}, expected_error=ERR_MISSING_TAGS),
    TagScenario(
        name='missing_service_name',
        tags=without(SERVICE_NAME),
        expected_error=f'Missing required tag: {SERVICE_NAME}',
    ),
    TagScenario(
        name='missing_owner_email',
        tags=without(OWNER_EMAIL),
        expected_error=f'Missing required tag: {OWNER_EMAIL}',
    ),
]


@pytest.mark.parametrize('test_case', TAG_SCENARIOS, ids=str)
def test_validate_tags(test_case):
    if test_case.expected_error:
        with pytest.raises(MissingTagsException, match=test_case.expected_error):
            validate_tags(test_case.tags)
    else:
        validate_tags(test_case.tags)


def test_missing_tags_is_a_validation_error():
    with pytest.raises(ValidationException):
        validate_tags({})


def test_create_queue_tags_returns_a_copy():
    tags = dict(REQUIRED_TAGS)
    queue_tags = create_queue_tags(tags)

    assert queue_tags == REQUIRED_TAGS
    assert queue_tags is not tags


def test_create_topic_tags_is_sorted_by_key():
    topic_tags = create_topic_tags(REQUIRED_TAGS)

    assert topic_tags == [
        {'Key': 'businessUnit', 'Value': 'retail'},
        {'Key': 'env', 'Value': 'test'},
        {'Key': 'ownerEmail', 'Value': 'orders-team@example.com'},
        {'Key': 'serviceGroup', 'Value': 'commerce'},
        {'Key': 'serviceName', 'Value': 'orders'},
    ]


def test_create_topic_tags_validates():
    with pytest.raises(MissingTagsException):
        create_topic_tags(without(SERVICE_NAME))
