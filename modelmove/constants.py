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

"""Constants shared by the model move services and CLI."""

AZ_PATH_ENV = "MODELMOVE_AZ_PATH"
COMMAND_TIMEOUT_ENV = "MODELMOVE_COMMAND_TIMEOUT"
GITHUB_ACTIONS_ENV = "GITHUB_ACTIONS"

DEFAULT_AZ_PATH = "az"
# None waits for the az process indefinitely
DEFAULT_COMMAND_TIMEOUT = None

# GitHub Actions exposes action inputs as INPUT_<NAME> variables
ACTION_INPUT_PREFIX = "INPUT_"

# az argv templates, formatted token by token with the identity fields
RESOURCE_GROUP_SHOW = ("group", "show", "--name", "{resource_group}")
WORKSPACE_SHOW = (
    "ml", "workspace", "show",
    "--name", "{name}",
    "--resource-group", "{resource_group}",
)
REGISTRY_SHOW = (
    "ml", "registry", "show",
    "--name", "{name}",
    "--resource-group", "{resource_group}",
)
MODEL_IN_REGISTRY_SHOW = (
    "ml", "model", "show",
    "--name", "{name}",
    "--version", "{version}",
    "--registry-name", "{registry_name}",
    "--resource-group", "{resource_group}",
)
MODEL_IN_WORKSPACE_SHOW = (
    "ml", "model", "show",
    "--name", "{name}",
    "--version", "{version}",
    "--workspace-name", "{workspace_name}",
    "--resource-group", "{resource_group}",
)
MODEL_SHARE = (
    "ml", "model", "share",
    "--name", "{name}",
    "--version", "{version}",
    "--resource-group", "{resource_group}",
    "--workspace-name", "{workspace_name}",
    "--share-with-name", "{name}",
    "--share-with-version", "{version}",
    "--registry-name", "{registry_name}",
)
