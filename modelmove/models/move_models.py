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
This module defines the request and outcome models of the model move pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from modelmove.exceptions import (
    ConfigurationError,
    ModelMoveError,
    MoveFailedError,
    PreconditionNotMetError,
)

# Checked in this order; the first missing field aborts the run
REQUIRED_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("source_resource_group", "Source registry resource group"),
    ("source_workspace_name", "Source workspace name"),
    ("destination_registry_name", "Destination registry name"),
    ("destination_resource_group", "Destination registry resource group"),
    ("model_name", "Model name"),
    ("model_version", "Model version"),
)


class StepName(str, Enum):
    """Pipeline steps, in execution order."""
    VALIDATE_INPUTS = "validate_inputs"
    CHECK_SOURCE_RESOURCE_GROUP = "check_source_resource_group"
    CHECK_DESTINATION_RESOURCE_GROUP = "check_destination_resource_group"
    CHECK_SOURCE_WORKSPACE = "check_source_workspace"
    CHECK_DESTINATION_REGISTRY = "check_destination_registry"
    CHECK_MODEL_IN_SOURCE_WORKSPACE = "check_model_in_source_workspace"
    MOVE_MODEL = "move_model"

    @property
    def error_class(self) -> Type[ModelMoveError]:
        if self == StepName.VALIDATE_INPUTS:
            return ConfigurationError
        if self == StepName.MOVE_MODEL:
            return MoveFailedError
        return PreconditionNotMetError


@dataclass
class MigrationRequest:
    """Dataclass for holding the inputs of one model move."""
    source_resource_group: Optional[str] = None
    source_workspace_name: Optional[str] = None
    destination_registry_name: Optional[str] = None
    destination_resource_group: Optional[str] = None
    destination_registry_resource_group: Optional[str] = None
    model_name: Optional[str] = None
    model_version: Optional[str] = None
    source_registry_name: Optional[str] = None

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "MigrationRequest":
        """Create an instance from a dictionary of options.

        Values are stripped and empty strings become None, so an unset action
        input and a missing option look the same.
        """
        def _clean(key: str) -> Optional[str]:
            value = options.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        return cls(
            source_resource_group=_clean('source_resource_group'),
            source_workspace_name=_clean('source_workspace_name'),
            destination_registry_name=_clean('destination_registry_name'),
            destination_resource_group=_clean('destination_resource_group'),
            destination_registry_resource_group=_clean('destination_registry_resource_group'),
            model_name=_clean('model_name'),
            model_version=_clean('model_version'),
            source_registry_name=_clean('source_registry_name'),
        )

    def missing_field(self) -> Optional[str]:
        """Return the '<Field> is required' message of the first missing field, if any."""
        for attr, description in REQUIRED_FIELDS:
            value = getattr(self, attr)
            if value is None or not str(value).strip():
                return f"{description} is required"
        return None

    @property
    def registry_resource_group(self) -> Optional[str]:
        """Resource group used to look up the destination registry."""
        return (self.destination_registry_resource_group or "").strip() or self.destination_resource_group

    @property
    def checks_source_model(self) -> bool:
        return bool(self.source_registry_name)


@dataclass
class StepRecord:
    """Result of one executed pipeline step."""
    step: StepName
    passed: bool
    message: str
    diagnostic: str = ""


@dataclass
class MigrationOutcome:
    """Terminal state of one model move run."""
    succeeded: bool
    message: str
    failed_step: Optional[StepName] = None
    steps: List[StepRecord] = field(default_factory=list)

    @property
    def error_class(self) -> Optional[Type[ModelMoveError]]:
        if self.succeeded or self.failed_step is None:
            return None
        return self.failed_step.error_class

    @property
    def executed_steps(self) -> List[StepName]:
        return [record.step for record in self.steps]

    def raise_for_failure(self) -> None:
        """Raise the exception matching the failed step, for callers that prefer exceptions."""
        error_class = self.error_class
        if error_class is not None:
            raise error_class(self.message)
