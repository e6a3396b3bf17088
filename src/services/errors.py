# src/services/errors.py
from __future__ import annotations

from typing import List, Sequence


class DeploymentError(RuntimeError):
    """Base for every failure that ends a deployment run.

    Each subclass names the stage that failed and the process exit code the
    CLI reports for it.
    """
    stage = "deploy"
    exit_code = 1


# Configuration
class ConfigIncomplete(DeploymentError):
    stage = "config"
    exit_code = 2

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing: List[str] = list(missing)
        super().__init__(f"Input incomplete! Missing: {', '.join(self.missing)}")


class InvalidFileName(DeploymentError):
    stage = "version"
    exit_code = 3


# Artifact
class FileOpenError(DeploymentError):
    stage = "open"
    exit_code = 4


# Storage
class UploadFailed(DeploymentError):
    stage = "upload"
    exit_code = 5


# Function update
class InvalidUpdateRequest(DeploymentError):
    stage = "validate"
    exit_code = 6


class UpdateFailed(DeploymentError):
    stage = "update"
    exit_code = 7


# AWS session / client construction (bad region, endpoint, ...)
class ClientSetupFailed(DeploymentError):
    stage = "session"
    exit_code = 8


__all__ = [
    "DeploymentError",
    "ConfigIncomplete",
    "InvalidFileName",
    "FileOpenError",
    "UploadFailed",
    "InvalidUpdateRequest",
    "UpdateFailed",
    "ClientSetupFailed",
]
