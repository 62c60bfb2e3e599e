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
Topic setup module for topic lookups and SNS to SQS subscription policies.

A queue subscribed to an SNS topic only receives notifications if its access
policy allows the topic to send messages to it. This module builds that policy
statement and merges it into the queue's existing policy.
'''

from __future__ import annotations

import json
import logging

from .sns_wrapper import SnsWrapper
from .sqs_wrapper import SqsWrapper

logger = logging.getLogger(__name__)

POLICY_VERSION = '2012-10-17'
SNS_SERVICE_PRINCIPAL = 'sns.amazonaws.com'
SEND_MESSAGE_ACTION = 'SQS:SendMessage'


def get_topic_arn(sns_wrapper: SnsWrapper, topic_name: str) -> str:
    # No SNS call returns just the ARN, create-topic is idempotent by name
    return sns_wrapper.create_topic(topic_name)


def set_topic_policy(sqs_wrapper: SqsWrapper, queue_url: str, policy: str) -> None:
    sqs_wrapper.set_queue_attributes(queue_url, {'Policy': policy})


def _topic_statement(sid: str, queue_arn: str, topic_arn: str) -> dict:
    return {
        'Sid': sid,
        'Effect': 'Allow',
        'Principal': {'Service': SNS_SERVICE_PRINCIPAL},
        'Action': SEND_MESSAGE_ACTION,
        'Resource': queue_arn,
        'Condition': {'ArnEquals': {'aws:SourceArn': topic_arn}},
    }


def _grants_topic(statement: dict, topic_arn: str) -> bool:
    source_arn = statement.get('Condition', {}).get('ArnEquals', {}).get('aws:SourceArn')
    return statement.get('Action') == SEND_MESSAGE_ACTION and source_arn == topic_arn


def get_policy_content(sqs_wrapper: SqsWrapper, queue_url: str, topic_arn: str) -> str:
    '''
    Build the queue policy allowing a topic to send messages to the queue.

    The statement is appended to the queue's current policy, so grants for
    other topics are kept. If the queue has no policy yet, a default empty
    policy is used. If the topic is already granted, the policy is returned
    unchanged.

    Args:
        sqs_wrapper: The SQS wrapper to use.
        queue_url: The URL of the subscribed queue.
        topic_arn: The ARN of the topic.

    Returns:
        The policy document as a JSON string.

    Raises:
        ClientError: If the queue attributes cannot be read.
        ValueError: If the existing policy is not valid JSON.
    '''
    queue_arn = sqs_wrapper.get_queue_arn(queue_url)
    attributes = sqs_wrapper.get_queue_attributes(queue_url, ['Policy'])

    if 'Policy' in attributes:
        policy = json.loads(attributes['Policy'])
    else:
        policy = {'Version': POLICY_VERSION, 'Id': f'{queue_arn}/SQSDefaultPolicy'}

    statements = policy.setdefault('Statement', [])
    if isinstance(statements, dict):
        statements = policy['Statement'] = [statements]

    if any(_grants_topic(statement, topic_arn) for statement in statements):
        logger.debug(f'Queue policy already allows {topic_arn}')
    else:
        sid = f'Sid{topic_arn.rsplit(":", 1)[-1]}{len(statements) + 1}'
        statements.append(_topic_statement(sid, queue_arn, topic_arn))

    return json.dumps(policy)
