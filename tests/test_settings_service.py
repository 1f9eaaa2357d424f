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

import tempfile
import unittest
from pathlib import Path

from modelmove.exceptions import ConfigurationError
from modelmove.services.settings_service import MoveSettings, SettingsService


class TestSettingsService(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        self.service = SettingsService()

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, content: str) -> Path:
        path = self.tmp_path / "model_move.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_load_settings(self):
        path = self._write(
            "source_workspace_name: ws-dev\n"
            "source_resource_group: rg-src\n"
            "model_name: churn\n"
            "model_version: 3\n"
            "timeout: 120\n"
        )

        settings = self.service.load_settings(path)

        self.assertEqual(settings.source_workspace_name, "ws-dev")
        self.assertEqual(settings.model_version, "3")
        self.assertEqual(settings.timeout, 120)

    def test_empty_file_gives_empty_settings(self):
        settings = self.service.load_settings(self._write(""))
        self.assertEqual(settings, MoveSettings())

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            self.service.load_settings(self.tmp_path / "absent.yaml")

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigurationError):
            self.service.load_settings(self._write("model_name: [unclosed\n"))

    def test_non_mapping(self):
        with self.assertRaises(ConfigurationError):
            self.service.load_settings(self._write("- churn\n- 3\n"))

    def test_unknown_key(self):
        with self.assertRaises(ConfigurationError):
            self.service.load_settings(self._write("model_nme: churn\n"))

    def test_non_positive_timeout(self):
        with self.assertRaises(ConfigurationError):
            self.service.load_settings(self._write("timeout: 0\n"))

    def test_merge_prefers_explicit_values(self):
        settings = MoveSettings(model_name="from-file", model_version="1", az_path="/usr/bin/az")

        merged = self.service.merge(settings, {"model_name": "from-cli", "model_version": None, "source_registry_name": ""})

        self.assertEqual(merged["model_name"], "from-cli")
        self.assertEqual(merged["model_version"], "1")
        self.assertEqual(merged["az_path"], "/usr/bin/az")
        self.assertNotIn("source_registry_name", merged)

    def test_merge_without_settings(self):
        self.assertEqual(self.service.merge(None, {"model_name": "churn", "timeout": None}), {"model_name": "churn"})


if __name__ == "__main__":
    unittest.main()
