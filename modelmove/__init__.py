"""
modelmove - Move a versioned Azure ML model from a workspace into a registry.
"""

__version__ = "0.1.0"
__author__ = "AgentCube Community"
__email__ = "agentcube@volcano.sh"

from .models.move_models import MigrationOutcome, MigrationRequest
from .runtime.move_runtime import MoveRuntime
from .runtime.probe_runtime import ProbeRuntime
from .services.az_cli_service import AzureCliService

__all__ = [
    "AzureCliService",
    "MigrationOutcome",
    "MigrationRequest",
    "MoveRuntime",
    "ProbeRuntime",
]
