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
Message model for items received from an SQS queue.
'''

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class Message:
    '''
    A single message received from an SQS queue.

    Attributes:
        message_id: The SQS message ID.
        receipt_handle: Token identifying this receipt of the message. It is
            required to delete (acknowledge) the message.
        body: The message body.
        attributes: String message attributes, keyed by attribute name.
        system_attributes: SQS system attributes (e.g. ApproximateReceiveCount).
    '''

    message_id: Optional[str]
    receipt_handle: str
    body: str
    attributes: Dict[str, str] = field(default_factory=dict)
    system_attributes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_sqs(cls, raw_message: dict) -> Message:
        '''
        Build a message from an entry of a ReceiveMessage response.

        Only string and number attributes are kept. Binary attributes are dropped.

        Args:
            raw_message: One element of the 'Messages' list returned by boto3.

        Returns:
            The parsed message.
        '''
        attributes = {
            name: value['StringValue']
            for name, value in raw_message.get('MessageAttributes', {}).items()
            if 'StringValue' in value
        }

        return cls(
            message_id=raw_message.get('MessageId'),
            receipt_handle=raw_message['ReceiptHandle'],
            body=raw_message.get('Body', ''),
            attributes=attributes,
            system_attributes=dict(raw_message.get('Attributes', {})),
        )
