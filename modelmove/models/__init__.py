"""
Data models for the model move pipeline.

Everything here is transient and call-scoped: identities and verdicts are built
per probe, requests and outcomes per run.
"""

from .move_models import MigrationOutcome, MigrationRequest, StepName, StepRecord
from .resource_models import ExistenceVerdict, ResourceIdentity, ResourceKind

__all__ = [
    "ExistenceVerdict",
    "MigrationOutcome",
    "MigrationRequest",
    "ResourceIdentity",
    "ResourceKind",
    "StepName",
    "StepRecord",
]
