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
Configuration module for messaging defaults.

This module loads configuration from environment variables, optionally overridden
by a JSON file for deployments that ship one. The values
are only defaults: every constructor in the package accepts explicit arguments
that take precedence.

Configuration Keys:
    region: AWS region for boto3 clients (None lets boto3 resolve it)
    receive_message_wait_seconds: Long polling wait time used by listeners
    max_number_of_messages: Maximum batch size of a single receive call
    retry_attempts: Number of retries after a throttled publish
    retry_wait_base_seconds: Base wait between retries, in seconds

Loading Strategy:
    1. Reads environment variables, applying built-in defaults
    2. Updates the result with config.json in the same directory, if present
    3. Keeps the environment values if the JSON file cannot be read

Environment Variables:
    AWS_REGION: AWS region
    RECEIVE_MESSAGE_WAIT_SECONDS: Long polling wait time (default 20)
    MAX_NUMBER_OF_MESSAGES: Receive batch size (default 10)
    RETRY_ATTEMPTS: Retry attempts (default 3)
    RETRY_WAIT_BASE_SECONDS: Retry wait base (default 1.0)

Usage:
    >>> from aws_messaging.config import CONFIG
    >>> CONFIG['receive_message_wait_seconds']
    20

Attributes:
    CONFIG_FILE: Path to the config.json file
    CONFIG: Dictionary containing all configuration values
'''

from pathlib import Path
import json
import logging
import os

# Path to configuration file in the same directory as this module
CONFIG_FILE = Path(Path(__file__).parent, 'config.json')
logger = logging.getLogger(__name__)


def _from_environment() -> dict:
    return {
        'region': os.getenv('AWS_REGION'),
        'receive_message_wait_seconds': int(os.getenv('RECEIVE_MESSAGE_WAIT_SECONDS', '20')),
        'max_number_of_messages': int(os.getenv('MAX_NUMBER_OF_MESSAGES', '10')),
        'retry_attempts': int(os.getenv('RETRY_ATTEMPTS', '3')),
        'retry_wait_base_seconds': float(os.getenv('RETRY_WAIT_BASE_SECONDS', '1.0')),
    }


CONFIG = _from_environment()

if CONFIG_FILE.exists():
    try:
        with CONFIG_FILE.open(encoding='utf-8') as config_file:
            CONFIG.update(json.load(config_file))
    except (OSError, ValueError) as e:
        # Keep the environment based configuration if the file is unreadable
        logger.error(f'Error loading config file: {CONFIG_FILE}: {e}')
