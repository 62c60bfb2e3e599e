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
SNS wrapper module for simplified SNS operations.

This module provides a simplified interface for topic creation, queue
subscriptions and publishing. It wraps the boto3 SNS client to provide a
simpler API for the operations the publishers and the manager need.
'''

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from .sqs_wrapper import to_message_attributes


class SnsWrapper:
    '''
    A wrapper class for SNS operations.

    Attributes:
        sns_client: The boto3 SNS client.
    '''

    ClientException = ClientError

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        '''
        Initialize the SNS wrapper.

        Args:
            region: AWS region. If not set, boto3 resolves it from the environment.
            client: Optional preconfigured SNS client.
        '''
        self.sns_client = client if client is not None else boto3.client('sns', region_name=region)

    def create_topic(self, topic_name: str, tags: Optional[List[dict]] = None) -> str:
        '''
        Create a topic, or look up an existing one.

        Topic creation is idempotent by name: if the topic already exists its
        ARN is returned. There is no separate SNS call for looking up a topic
        ARN by name, so this is also used for lookups.

        Args:
            topic_name: Name of the topic.
            tags: Optional list of {'Key': ..., 'Value': ...} tags.

        Returns:
            The ARN of the topic.
        '''
        kwargs: Dict[str, Any] = {'Name': topic_name}
        if tags:
            kwargs['Tags'] = tags

        response = self.sns_client.create_topic(**kwargs)
        return response['TopicArn']

    def subscribe(
        self, topic_arn: str, protocol: str, endpoint: str, attributes: Dict[str, str]
    ) -> str:
        '''
        Subscribe an endpoint to a topic.

        Returns:
            The ARN of the subscription.
        '''
        response = self.sns_client.subscribe(
            TopicArn=topic_arn,
            Protocol=protocol,
            Endpoint=endpoint,
            Attributes=attributes,
            ReturnSubscriptionArn=True,
        )
        return response['SubscriptionArn']

    def publish(
        self,
        topic_arn: str,
        message: str,
        subject: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> str:
        '''
        Publish a message to a topic.

        Args:
            topic_arn: The ARN of the topic.
            message: The message body.
            subject: Optional subject. SNS includes it in the notification
                envelope delivered to subscribed queues.
            attributes: Optional string message attributes.

        Returns:
            The ID of the published message.
        '''
        kwargs: Dict[str, Any] = {
            'TopicArn': topic_arn,
            'Message': message,
        }
        if subject is not None:
            kwargs['Subject'] = subject
        if attributes:
            kwargs['MessageAttributes'] = to_message_attributes(attributes)

        response = self.sns_client.publish(**kwargs)
        return response['MessageId']
