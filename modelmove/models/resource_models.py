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
This module defines the identity and verdict models used by the resource prober.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class ResourceKind(str, Enum):
    """Kinds of Azure resources the prober can look up."""
    RESOURCE_GROUP = "resource_group"
    WORKSPACE = "workspace"
    REGISTRY = "registry"
    MODEL = "model"


@dataclass(frozen=True)
class ResourceIdentity:
    """Identity tuple of a single resource to probe."""
    kind: ResourceKind
    name: str
    resource_group: str
    workspace_name: Optional[str] = None
    registry_name: Optional[str] = None
    version: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError(f"{self.kind.value} name must not be blank")
        if not self.resource_group or not self.resource_group.strip():
            raise ValueError(f"Resource group of {self.kind.value} '{self.name}' must not be blank")

        if self.kind == ResourceKind.MODEL:
            if not self.version:
                raise ValueError(f"Model '{self.name}' requires a version")
            if bool(self.workspace_name) == bool(self.registry_name):
                raise ValueError(
                    f"Model '{self.name}' must be scoped to exactly one of a workspace or a registry"
                )

    @classmethod
    def resource_group_of(cls, resource_group: str) -> "ResourceIdentity":
        return cls(ResourceKind.RESOURCE_GROUP, name=resource_group, resource_group=resource_group)

    def template_fields(self) -> Dict[str, str]:
        """Fields available to the az command templates."""
        return {
            "name": self.name,
            "resource_group": self.resource_group,
            "workspace_name": self.workspace_name or "",
            "registry_name": self.registry_name or "",
            "version": self.version or "",
        }

    def describe(self) -> str:
        if self.kind == ResourceKind.RESOURCE_GROUP:
            return f"Resource Group '{self.name}'"
        if self.kind == ResourceKind.MODEL:
            scope = f"workspace '{self.workspace_name}'" if self.workspace_name else f"registry '{self.registry_name}'"
            return f"Model '{self.name}' (version {self.version}) in {scope}"
        return f"{self.kind.value.capitalize()} '{self.name}' in resource group '{self.resource_group}'"


@dataclass(frozen=True)
class ExistenceVerdict:
    """Result of one probe or move invocation.

    `diagnostic` holds the captured stdout when the command succeeded, otherwise
    the captured stderr or, when stderr is empty, the invocation error message.
    `exit_code` is None when the process never ran to completion.
    """
    exists: bool
    diagnostic: str
    exit_code: Optional[int] = None
