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
Resource tag validation for queues and topics.

Every queue and topic must carry the ownership tags listed in REQUIRED_TAGS.
'''

from __future__ import annotations

from typing import Dict, List, Optional

from .exceptions import MissingTagsException

ENV = 'env'
SERVICE_NAME = 'serviceName'
SERVICE_GROUP = 'serviceGroup'
BUSINESS_UNIT = 'businessUnit'
OWNER_EMAIL = 'ownerEmail'

REQUIRED_TAGS = (
    ENV,
    SERVICE_NAME,
    SERVICE_GROUP,
    BUSINESS_UNIT,
    OWNER_EMAIL,
)

ERR_MISSING_TAGS = 'missing tags'


def validate_tags(tags: Optional[Dict[str, str]]) -> None:
    '''
    Check that all required tags are present.

    Args:
        tags: The tags to validate.

    Raises:
        MissingTagsException: If tags are empty or a required tag is missing.
    '''
    if not tags:
        raise MissingTagsException(ERR_MISSING_TAGS)

    for required_tag in REQUIRED_TAGS:
        if required_tag not in tags:
            raise MissingTagsException(f'Missing required tag: {required_tag}')


def create_queue_tags(tags: Optional[Dict[str, str]]) -> Dict[str, str]:
    validate_tags(tags)
    return dict(tags or {})


def create_topic_tags(tags: Optional[Dict[str, str]]) -> List[dict]:
    '''
    Validate tags and convert them to the SNS tag list format, sorted by key.
    '''
    validate_tags(tags)
    return [{'Key': key, 'Value': value} for key, value in sorted((tags or {}).items())]
