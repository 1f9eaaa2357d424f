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
Settings service for loading model move inputs from a YAML file.

The file carries the same inputs as the `move` command, plus the az executable
and the per-command timeout. Values given on the command line or through the
action input variables take precedence over the file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modelmove.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class MoveSettings(BaseModel):
    """Pydantic model for the model move settings file."""

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    source_registry_name: Optional[str] = Field(None, description="Source registry; when set, the model is checked in the source workspace")
    source_workspace_name: Optional[str] = Field(None, description="Workspace holding the model")
    source_resource_group: Optional[str] = Field(None, description="Resource group of the source workspace")
    destination_resource_group: Optional[str] = Field(None, description="Destination resource group")
    destination_registry_name: Optional[str] = Field(None, description="Registry receiving the model")
    destination_registry_resource_group: Optional[str] = Field(None, description="Resource group of the destination registry")
    model_name: Optional[str] = Field(None, description="Name of the model to move")
    model_version: Optional[str] = Field(None, description="Version of the model to move")

    az_path: Optional[str] = Field(None, description="Path or name of the az executable")
    timeout: Optional[float] = Field(None, description="Seconds to wait for each az command")

    @field_validator('model_version', mode='before')
    @classmethod
    def coerce_version(cls, v):
        # YAML reads `model_version: 3` as an int
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError(f"Timeout {v} must be a positive number of seconds")
        return v


class SettingsService:
    """Service for reading model move settings files."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def load_settings(self, settings_file: Path) -> MoveSettings:
        """
        Load settings from a YAML file.

        Args:
            settings_file: Path to the YAML settings file

        Returns:
            MoveSettings: Validated settings object

        Raises:
            ConfigurationError: If the file is missing, not valid YAML, or has invalid values
        """
        if not settings_file.is_file():
            raise ConfigurationError(f"Settings file not found: {settings_file}")

        if self.verbose:
            logger.debug(f"Loading settings from: {settings_file}")

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                settings_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in settings file: {e}") from e

        if not isinstance(settings_dict, dict):
            raise ConfigurationError(f"Settings file {settings_file} must contain a mapping")

        try:
            return MoveSettings(**settings_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings in {settings_file}: {e}") from e

    def merge(self, settings: Optional[MoveSettings], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """
        Combine file settings with explicit values.

        Args:
            settings: Settings loaded from file, if any
            overrides: Values from the command line or environment; None means unset

        Returns:
            Dict of merged options
        """
        merged: Dict[str, Any] = settings.model_dump(exclude_none=True) if settings else {}
        merged.update({k: v for k, v in overrides.items() if v is not None and v != ""})

        if self.verbose:
            logger.debug(f"Resolved options: {sorted(merged)}")

        return merged
