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

import logging
from typing import Union

LOG_FORMAT = '%(asctime)s | %(levelname)-4s | %(name)-20s | %(message)s'

# Initialize logger configuration once
def get_logger(name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Get a logger instance with basic configuration"""
    logger = logging.getLogger(name)

    # Configure only if no handlers are already set
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger used by every modelmove module.

    Probe diagnostics are logged at INFO, captured command output at DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger("modelmove", level=level)
    logger.setLevel(level)
    return logger
