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
Probe runtime for modelmove.

This module implements the probe command, a single existence check of one
resource group, workspace, registry or model.
"""

import logging
from typing import Optional

from modelmove.models.resource_models import ExistenceVerdict, ResourceIdentity, ResourceKind
from modelmove.services.az_cli_service import AzureCliService

logger = logging.getLogger(__name__)


class ProbeRuntime:
    """Runtime for the probe command."""

    def __init__(
        self,
        verbose: bool = False,
        az_service: Optional[AzureCliService] = None,
        az_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.verbose = verbose
        self.az_service = az_service or AzureCliService(verbose=verbose, az_path=az_path, timeout=timeout)

    def probe(
        self,
        kind: ResourceKind,
        name: str,
        resource_group: Optional[str] = None,
        workspace_name: Optional[str] = None,
        registry_name: Optional[str] = None,
        version: Optional[str] = None,
    ) -> ExistenceVerdict:
        """
        Check whether a single resource exists.

        Args:
            kind: Kind of resource
            name: Name of the resource
            resource_group: Resource group; defaults to `name` for resource groups
            workspace_name: Workspace scope of a model
            registry_name: Registry scope of a model
            version: Model version

        Returns:
            ExistenceVerdict of the lookup

        Raises:
            ValueError: If the identity is incomplete
        """
        if kind == ResourceKind.RESOURCE_GROUP:
            resource_group = resource_group or name

        identity = ResourceIdentity(
            kind,
            name,
            resource_group or "",
            workspace_name=workspace_name or None,
            registry_name=registry_name or None,
            version=version or None,
        )

        logger.info(f"🔹 Checking if {identity.describe()} exists...")

        return self.az_service.probe(identity)
