"""
Build output models.

These models describe what a build run produced: the keystore outcome, the
packaged artifact and the per-stage record of the run.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ..core.types import StageResult, utc_now


class KeystoreOutcome(str, Enum):
    """How a keystore came into existence."""

    GENUINE = "genuine"
    SIMULATED = "simulated"


class KeystoreResult(BaseModel):
    """Result of keystore generation."""

    outcome: KeystoreOutcome = Field(description="Genuine keytool output or a placeholder file")
    key: str = Field(description="Storage key of the keystore file")
    alias: str = Field(description="Key alias inside the keystore")
    detail: str = Field(default="", description="Why a placeholder was written, if it was")

    @property
    def is_simulated(self) -> bool:
        return self.outcome is KeystoreOutcome.SIMULATED


class BuildResult(BaseModel):
    """Result of a complete build run."""

    run_id: str
    success: bool
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None

    project_directory: str = Field(default="", description="Storage prefix of the generated tree")
    apk_key: str = Field(default="", description="Storage key of the packaged artifact")
    apk_filename: str = Field(default="", description="Suggested download file name")
    keystore: KeystoreResult | None = None

    stages: list[StageResult] = Field(default_factory=list)

    error: str | None = None
    failed_stage: str | None = None

    @property
    def apk_basename(self) -> str:
        """File name part of the artifact key."""
        return self.apk_key.rsplit("/", 1)[-1]

    def get_stage(self, name: str) -> StageResult | None:
        """Get a stage result by name."""
        for stage in self.stages:
            if stage.stage_name == name:
                return stage
        return None
