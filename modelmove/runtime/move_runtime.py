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
Move runtime for modelmove.

This module implements the move command: it validates the inputs, checks that
every resource involved exists, and only then shares the model from the source
workspace into the destination registry. The first failing step ends the run.
"""

import logging
from typing import Callable, List, Optional, Tuple

from modelmove.models.move_models import MigrationOutcome, MigrationRequest, StepName, StepRecord
from modelmove.models.resource_models import ExistenceVerdict
from modelmove.services.az_cli_service import AzureCliService

logger = logging.getLogger(__name__)

Step = Callable[[MigrationRequest], StepRecord]


class MoveRuntime:
    """Runtime for the move command."""

    def __init__(
        self,
        verbose: bool = False,
        az_service: Optional[AzureCliService] = None,
        az_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.verbose = verbose
        self.az_service = az_service or AzureCliService(verbose=verbose, az_path=az_path, timeout=timeout)

    def move(
        self,
        request: MigrationRequest,
        on_step: Optional[Callable[[StepName], None]] = None
    ) -> MigrationOutcome:
        """
        Run the precondition checks and move the model.

        Args:
            request: Inputs of the move
            on_step: Called with each step name once the step has finished

        Returns:
            MigrationOutcome describing success, or the first failed step
        """
        records: List[StepRecord] = []

        for name, step in self.plan(request):
            try:
                record = step(request)
            except ValueError as e:
                # Identities the service rejects end the run like any failed check
                record = StepRecord(name, passed=False, message=str(e))
            records.append(record)
            if on_step is not None:
                on_step(record.step)

            if not record.passed:
                logger.error(record.message)
                return MigrationOutcome(
                    succeeded=False,
                    message=record.message,
                    failed_step=record.step,
                    steps=records,
                )

        return MigrationOutcome(
            succeeded=True,
            message=f"Model '{request.model_name}' moved to registry '{request.destination_registry_name}'.",
            steps=records,
        )

    def plan(self, request: MigrationRequest) -> List[Tuple[StepName, Step]]:
        """Steps to run for `request`, in order."""
        steps: List[Tuple[StepName, Step]] = [
            (StepName.VALIDATE_INPUTS, self._validate_inputs),
            (StepName.CHECK_SOURCE_RESOURCE_GROUP, self._check_source_resource_group),
            (StepName.CHECK_DESTINATION_RESOURCE_GROUP, self._check_destination_resource_group),
            (StepName.CHECK_SOURCE_WORKSPACE, self._check_source_workspace),
            (StepName.CHECK_DESTINATION_REGISTRY, self._check_destination_registry),
        ]
        # The source registry name only gates this check; it is not used by it
        if request.checks_source_model:
            steps.append((StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE, self._check_model_in_source_workspace))
        steps.append((StepName.MOVE_MODEL, self._move_model))
        return steps

    def _validate_inputs(self, request: MigrationRequest) -> StepRecord:
        missing = request.missing_field()
        if missing:
            return StepRecord(StepName.VALIDATE_INPUTS, passed=False, message=missing)
        return StepRecord(StepName.VALIDATE_INPUTS, passed=True, message="All required inputs are set.")

    def _check_source_resource_group(self, request: MigrationRequest) -> StepRecord:
        rg = request.source_resource_group
        logger.info(f"🔹 Checking if resource group '{rg}' exists...")
        return self._record(
            StepName.CHECK_SOURCE_RESOURCE_GROUP,
            self.az_service.probe_resource_group(rg),
            passed=f"Resource group '{rg}' exists.",
            failed=f"Resource group '{rg}' does not exist.",
        )

    def _check_destination_resource_group(self, request: MigrationRequest) -> StepRecord:
        rg = request.destination_resource_group
        logger.info(f"🔹 Checking if destination resource group '{rg}' exists...")
        return self._record(
            StepName.CHECK_DESTINATION_RESOURCE_GROUP,
            self.az_service.probe_resource_group(rg),
            passed=f"Resource group '{rg}' exists.",
            failed=f"Resource group '{rg}' does not exist.",
        )

    def _check_source_workspace(self, request: MigrationRequest) -> StepRecord:
        ws, rg = request.source_workspace_name, request.source_resource_group
        logger.info(f"🔹 Checking if workspace '{ws}' exists in resource group '{rg}'...")
        return self._record(
            StepName.CHECK_SOURCE_WORKSPACE,
            self.az_service.probe_workspace(ws, rg),
            passed=f"Workspace '{ws}' exists in resource group '{rg}'.",
            failed=f"Workspace '{ws}' does not exist in resource group '{rg}'.",
        )

    def _check_destination_registry(self, request: MigrationRequest) -> StepRecord:
        registry, rg = request.destination_registry_name, request.registry_resource_group
        logger.info(f"🔹 Checking if registry '{registry}' exists in resource group '{rg}'...")
        return self._record(
            StepName.CHECK_DESTINATION_REGISTRY,
            self.az_service.probe_registry(registry, rg),
            passed=f"Registry '{registry}' exists in resource group '{rg}'.",
            failed=f"Registry '{registry}' does not exist in resource group '{rg}'.",
        )

    def _check_model_in_source_workspace(self, request: MigrationRequest) -> StepRecord:
        model, ws = request.model_name, request.source_workspace_name
        logger.info(f"🔹 Checking if model '{model}' exists in workspace '{ws}'...")
        return self._record(
            StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE,
            self.az_service.probe_model_in_workspace(
                model, request.model_version, ws, request.source_resource_group
            ),
            passed=f"Model '{model}' exists in workspace '{ws}'.",
            failed=f"Model '{model}' does not exist in workspace '{ws}'.",
        )

    def _move_model(self, request: MigrationRequest) -> StepRecord:
        model, registry = request.model_name, request.destination_registry_name
        logger.info(f"🔹 Moving model '{model}' to registry '{registry}'...")
        return self._record(
            StepName.MOVE_MODEL,
            self.az_service.move_model(
                model,
                request.model_version,
                request.source_workspace_name,
                request.source_resource_group,
                registry,
            ),
            passed=f"Model '{model}' moved to registry '{registry}'.",
            failed=f"Failed to move model '{model}' to registry '{registry}'.",
        )

    def _record(self, step: StepName, verdict: ExistenceVerdict, passed: str, failed: str) -> StepRecord:
        if verdict.exists:
            logger.info(f"✅ {passed}")
        return StepRecord(
            step,
            passed=verdict.exists,
            message=passed if verdict.exists else failed,
            diagnostic=verdict.diagnostic,
        )
