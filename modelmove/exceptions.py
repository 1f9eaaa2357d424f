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

class ModelMoveError(Exception):
    """Base exception for all model move operations"""
    pass

class ConfigurationError(ModelMoveError):
    """Raised when a required input is missing or the settings file is invalid"""
    pass

class PreconditionNotMetError(ModelMoveError):
    """Raised when a probed resource group, workspace, registry or model does not exist"""
    pass

class MoveFailedError(ModelMoveError):
    """Raised when the az model share command exits with a failure"""
    pass

class InvocationError(ModelMoveError):
    """Raised when the az command could not be spawned at all"""
    def __init__(self, command, reason):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to run '{command}': {reason}")
