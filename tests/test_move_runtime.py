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

import unittest
from unittest.mock import Mock, patch

from modelmove.models.move_models import MigrationRequest, StepName
from modelmove.models.resource_models import ExistenceVerdict
from modelmove.runtime.move_runtime import MoveRuntime
from modelmove.services.az_cli_service import AzureCliService
from modelmove.services.process import CommandCapture, CommandRunner

FOUND = ExistenceVerdict(exists=True, diagnostic="{}", exit_code=0)
ABSENT = ExistenceVerdict(exists=False, diagnostic="ResourceNotFound", exit_code=3)

OPTIONS = {
    "source_resource_group": "rg-src",
    "source_workspace_name": "ws-dev",
    "destination_resource_group": "rg-dst",
    "destination_registry_name": "reg-prod",
    "destination_registry_resource_group": "rg-reg",
    "model_name": "churn",
    "model_version": "3",
}


def _az_service(**overrides):
    service = Mock(spec=AzureCliService)
    for method in (
        "probe_resource_group",
        "probe_workspace",
        "probe_registry",
        "probe_model_in_workspace",
        "move_model",
    ):
        getattr(service, method).return_value = overrides.get(method, FOUND)
    return service


class TestMoveRuntimeValidation(unittest.TestCase):
    def test_missing_field_fails_before_any_probe(self):
        for field_name in (
            "source_resource_group",
            "source_workspace_name",
            "destination_registry_name",
            "destination_resource_group",
            "model_name",
            "model_version",
        ):
            with self.subTest(field=field_name):
                options = dict(OPTIONS)
                del options[field_name]
                az = _az_service()

                outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(options))

                self.assertFalse(outcome.succeeded)
                self.assertEqual(outcome.failed_step, StepName.VALIDATE_INPUTS)
                self.assertTrue(outcome.message.endswith("is required"))
                self.assertEqual(az.method_calls, [])

    @patch("modelmove.services.process.subprocess.run")
    def test_missing_field_spawns_no_process(self, mock_run):
        options = dict(OPTIONS, model_name="")

        outcome = MoveRuntime(az_path="az").move(MigrationRequest.from_options(options))

        self.assertEqual(outcome.message, "Model name is required")
        mock_run.assert_not_called()


class TestMoveRuntimePipeline(unittest.TestCase):
    def test_success_without_source_registry_skips_model_check(self):
        az = _az_service()

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertTrue(outcome.succeeded)
        az.probe_model_in_workspace.assert_not_called()
        az.move_model.assert_called_once_with("churn", "3", "ws-dev", "rg-src", "reg-prod")
        self.assertNotIn(StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE, outcome.executed_steps)

    def test_success_runs_every_step_once_in_order(self):
        az = _az_service()
        request = MigrationRequest.from_options(dict(OPTIONS, source_registry_name="reg-dev"))

        outcome = MoveRuntime(az_service=az).move(request)

        self.assertTrue(outcome.succeeded)
        self.assertIsNone(outcome.failed_step)
        self.assertIn("churn", outcome.message)
        self.assertIn("reg-prod", outcome.message)
        self.assertEqual(
            [name for name, _, _ in az.method_calls],
            [
                "probe_resource_group",
                "probe_resource_group",
                "probe_workspace",
                "probe_registry",
                "probe_model_in_workspace",
                "move_model",
            ],
        )
        self.assertEqual(
            outcome.executed_steps,
            [
                StepName.VALIDATE_INPUTS,
                StepName.CHECK_SOURCE_RESOURCE_GROUP,
                StepName.CHECK_DESTINATION_RESOURCE_GROUP,
                StepName.CHECK_SOURCE_WORKSPACE,
                StepName.CHECK_DESTINATION_REGISTRY,
                StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE,
                StepName.MOVE_MODEL,
            ],
        )

    def test_probes_use_the_right_resource_groups(self):
        az = _az_service()
        request = MigrationRequest.from_options(dict(OPTIONS, source_registry_name="reg-dev"))

        MoveRuntime(az_service=az).move(request)

        self.assertEqual(
            [c.args for c in az.probe_resource_group.call_args_list],
            [("rg-src",), ("rg-dst",)],
        )
        az.probe_workspace.assert_called_once_with("ws-dev", "rg-src")
        az.probe_registry.assert_called_once_with("reg-prod", "rg-reg")
        az.probe_model_in_workspace.assert_called_once_with("churn", "3", "ws-dev", "rg-src")

    def test_missing_source_resource_group(self):
        az = _az_service(probe_resource_group=ABSENT)

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.failed_step, StepName.CHECK_SOURCE_RESOURCE_GROUP)
        self.assertEqual(outcome.message, "Resource group 'rg-src' does not exist.")
        self.assertEqual(outcome.steps[-1].diagnostic, "ResourceNotFound")
        az.probe_workspace.assert_not_called()
        az.move_model.assert_not_called()

    def test_missing_destination_resource_group(self):
        az = _az_service()
        az.probe_resource_group.side_effect = [FOUND, ABSENT]

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertEqual(outcome.failed_step, StepName.CHECK_DESTINATION_RESOURCE_GROUP)
        self.assertEqual(outcome.message, "Resource group 'rg-dst' does not exist.")
        az.move_model.assert_not_called()

    def test_missing_workspace(self):
        az = _az_service(probe_workspace=ABSENT)

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertEqual(outcome.failed_step, StepName.CHECK_SOURCE_WORKSPACE)
        self.assertEqual(outcome.message, "Workspace 'ws-dev' does not exist in resource group 'rg-src'.")
        az.probe_registry.assert_not_called()

    def test_missing_registry(self):
        az = _az_service(probe_registry=ABSENT)

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertEqual(outcome.failed_step, StepName.CHECK_DESTINATION_REGISTRY)
        self.assertEqual(outcome.message, "Registry 'reg-prod' does not exist in resource group 'rg-reg'.")
        az.move_model.assert_not_called()

    def test_missing_model_stops_before_move(self):
        az = _az_service(probe_model_in_workspace=ABSENT)
        request = MigrationRequest.from_options(dict(OPTIONS, source_registry_name="reg-dev"))

        outcome = MoveRuntime(az_service=az).move(request)

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.failed_step, StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE)
        self.assertEqual(outcome.message, "Model 'churn' does not exist in workspace 'ws-dev'.")
        az.move_model.assert_not_called()

    def test_failed_move(self):
        az = _az_service(move_model=ExistenceVerdict(exists=False, diagnostic="AuthorizationFailed", exit_code=1))

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.failed_step, StepName.MOVE_MODEL)
        self.assertEqual(outcome.message, "Failed to move model 'churn' to registry 'reg-prod'.")

    def test_on_step_reports_each_finished_step(self):
        seen = []

        MoveRuntime(az_service=_az_service()).move(MigrationRequest.from_options(OPTIONS), on_step=seen.append)

        self.assertEqual(seen[0], StepName.VALIDATE_INPUTS)
        self.assertEqual(seen[-1], StepName.MOVE_MODEL)

    def test_broken_az_looks_like_a_missing_resource(self):
        absent = MoveRuntime(az_service=_az_service(probe_resource_group=ABSENT)).move(
            MigrationRequest.from_options(OPTIONS)
        )
        broken = MoveRuntime(az_path="/nonexistent/bin/az-cli-missing").move(
            MigrationRequest.from_options(OPTIONS)
        )

        self.assertEqual(broken.succeeded, absent.succeeded)
        self.assertEqual(broken.failed_step, absent.failed_step)
        self.assertEqual(broken.message, absent.message)
        self.assertIn("az-cli-missing", broken.steps[-1].diagnostic)


class TestMoveRuntimeBlankRegistryResourceGroup(unittest.TestCase):
    @staticmethod
    def _succeeding_runner():
        def run(argv):
            capture = CommandCapture(argv)
            capture.feed("{}", "")
            capture.returncode = 0
            capture.finalize()
            return capture

        runner = Mock(spec=CommandRunner)
        runner.run.side_effect = run
        return runner

    def test_blank_registry_resource_group_falls_back(self):
        runner = self._succeeding_runner()
        request = MigrationRequest(**dict(OPTIONS, destination_registry_resource_group="   "))

        outcome = MoveRuntime(az_service=AzureCliService(az_path="az", runner=runner)).move(request)

        self.assertTrue(outcome.succeeded, outcome.message)
        registry_argv = runner.run.call_args_list[3].args[0]
        self.assertEqual(registry_argv[1:4], ["ml", "registry", "show"])
        self.assertEqual(registry_argv[registry_argv.index("--resource-group") + 1], "rg-dst")

    def test_rejected_identity_becomes_failed_step(self):
        az = _az_service()
        az.probe_registry.side_effect = ValueError("Name of registry must not be blank")

        outcome = MoveRuntime(az_service=az).move(MigrationRequest.from_options(OPTIONS))

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.failed_step, StepName.CHECK_DESTINATION_REGISTRY)
        self.assertEqual(outcome.message, "Name of registry must not be blank")
        az.move_model.assert_not_called()


if __name__ == "__main__":
    unittest.main()
