# Copyright The Volcano Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration module for the model move CLI
"""
import os
from typing import Optional

from dotenv import load_dotenv

from modelmove import constants


# Load environment variables from .env file
load_dotenv()


def get_az_path() -> str:
    """
    Get the az executable from environment or return default

    Returns:
        Path or name of the az executable
    """
    return os.getenv(constants.AZ_PATH_ENV, constants.DEFAULT_AZ_PATH)


def get_command_timeout() -> Optional[float]:
    """
    Get the per-invocation timeout in seconds from environment

    Returns:
        Timeout in seconds, or None to wait indefinitely
    """
    value = os.getenv(constants.COMMAND_TIMEOUT_ENV)
    if not value:
        return constants.DEFAULT_COMMAND_TIMEOUT
    timeout = float(value)
    if timeout <= 0:
        raise ValueError(f"{constants.COMMAND_TIMEOUT_ENV} must be positive, got {value}")
    return timeout


def action_input_env(name: str) -> str:
    """Name of the GitHub Actions variable carrying the action input `name`."""
    return f"{constants.ACTION_INPUT_PREFIX}{name.replace(' ', '_').upper()}"


def running_in_github_actions() -> bool:
    return os.getenv(constants.GITHUB_ACTIONS_ENV, "").lower() == "true"
