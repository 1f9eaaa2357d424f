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
Azure CLI service for probing Azure ML resources and sharing models.

This service turns a resource identity into a single `az` invocation and
reduces its exit status to an ExistenceVerdict. Failures, including an `az`
executable that cannot be started, are returned as verdicts and never raised.
"""

import logging
from typing import Dict, List, Optional, Sequence

from modelmove import config, constants
from modelmove.models.resource_models import ExistenceVerdict, ResourceIdentity, ResourceKind
from modelmove.services.process import CommandCapture, CommandRunner

logger = logging.getLogger(__name__)


class AzureCliService:
    """Service for Azure ML existence checks and model sharing via the az CLI."""

    def __init__(
        self,
        verbose: bool = False,
        az_path: Optional[str] = None,
        timeout: Optional[float] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.verbose = verbose
        self.az_path = az_path or config.get_az_path()
        self.runner = runner or CommandRunner(timeout=timeout, verbose=verbose)

    def build_command(self, template: Sequence[str], fields: Dict[str, str]) -> List[str]:
        """Format an az argv template token by token."""
        return [self.az_path] + [token.format(**fields) for token in template]

    def _template_for(self, identity: ResourceIdentity) -> Sequence[str]:
        if identity.kind == ResourceKind.RESOURCE_GROUP:
            return constants.RESOURCE_GROUP_SHOW
        if identity.kind == ResourceKind.WORKSPACE:
            return constants.WORKSPACE_SHOW
        if identity.kind == ResourceKind.REGISTRY:
            return constants.REGISTRY_SHOW
        if identity.workspace_name:
            return constants.MODEL_IN_WORKSPACE_SHOW
        return constants.MODEL_IN_REGISTRY_SHOW

    def probe(self, identity: ResourceIdentity) -> ExistenceVerdict:
        """
        Check whether a resource exists.

        Args:
            identity: The resource to look up

        Returns:
            ExistenceVerdict with the captured stdout when the resource exists,
            or the captured stderr / invocation error when it does not
        """
        label = identity.describe()
        argv = self.build_command(self._template_for(identity), identity.template_fields())
        verdict = self._reduce(self.runner.run(argv))

        if verdict.exists:
            logger.info(f"✅ {label} found.")
            logger.debug(f"Output: {verdict.diagnostic}")
        else:
            logger.info(f"❌ {label} not found or error occurred: {verdict.diagnostic}")
        return verdict

    def probe_resource_group(self, resource_group: str) -> ExistenceVerdict:
        return self.probe(ResourceIdentity.resource_group_of(resource_group))

    def probe_workspace(self, workspace_name: str, resource_group: str) -> ExistenceVerdict:
        return self.probe(ResourceIdentity(ResourceKind.WORKSPACE, workspace_name, resource_group))

    def probe_registry(self, registry_name: str, resource_group: str) -> ExistenceVerdict:
        return self.probe(ResourceIdentity(ResourceKind.REGISTRY, registry_name, resource_group))

    def probe_model_in_registry(
        self,
        model_name: str,
        model_version: str,
        registry_name: str,
        resource_group: str
    ) -> ExistenceVerdict:
        return self.probe(ResourceIdentity(
            ResourceKind.MODEL,
            model_name,
            resource_group,
            registry_name=registry_name,
            version=model_version,
        ))

    def probe_model_in_workspace(
        self,
        model_name: str,
        model_version: str,
        workspace_name: str,
        resource_group: str
    ) -> ExistenceVerdict:
        return self.probe(ResourceIdentity(
            ResourceKind.MODEL,
            model_name,
            resource_group,
            workspace_name=workspace_name,
            version=model_version,
        ))

    def move_model(
        self,
        model_name: str,
        model_version: str,
        source_workspace: str,
        source_resource_group: str,
        destination_registry: str
    ) -> ExistenceVerdict:
        """
        Share a model version from a workspace into a registry.

        The model keeps its name and version in the destination registry.

        Args:
            model_name: Name of the model
            model_version: Version of the model
            source_workspace: Workspace holding the model
            source_resource_group: Resource group of the source workspace
            destination_registry: Registry receiving the model

        Returns:
            ExistenceVerdict whose `exists` is True when az reported success
        """
        # Validates the fields; the share command takes both a workspace and a registry
        ResourceIdentity(
            ResourceKind.MODEL,
            model_name,
            source_resource_group,
            workspace_name=source_workspace,
            version=model_version,
        )
        if not destination_registry or not destination_registry.strip():
            raise ValueError("Destination registry name must not be blank")

        fields = {
            "name": model_name,
            "version": model_version,
            "resource_group": source_resource_group,
            "workspace_name": source_workspace,
            "registry_name": destination_registry,
        }
        argv = self.build_command(constants.MODEL_SHARE, fields)
        verdict = self._reduce(self.runner.run(argv))

        if verdict.exists:
            logger.info(f"✅ Model '{model_name}' shared with registry '{destination_registry}'.")
            logger.debug(f"Output: {verdict.diagnostic}")
        else:
            logger.info(f"❌ Model move failed or error occurred: {verdict.diagnostic}")
        return verdict

    def _reduce(self, capture: CommandCapture) -> ExistenceVerdict:
        """Map a finished invocation to a verdict."""
        if capture.ok:
            return ExistenceVerdict(exists=True, diagnostic=capture.stdout, exit_code=0)

        if capture.invocation_error is not None:
            logger.warning(str(capture.invocation_error))
        elif self.verbose and capture.error:
            logger.debug(f"'{capture.command_line}' failed: {capture.error}")
        return ExistenceVerdict(
            exists=False,
            diagnostic=capture.stderr or capture.error or "",
            exit_code=capture.returncode,
        )
