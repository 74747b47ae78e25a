"""
Build pipeline orchestration for ZeroApp Builder.

Runs the three build stages for one request: code generation, keystore
generation and packaging. Every run gets a unique id and its own storage
prefixes, so concurrent requests never share files.
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Any

from ..core.config import Config, get_config
from ..core.exceptions import PipelineError, ZeroAppError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import ServiceResult, StageResult, utc_now
from ..models.build import BuildResult, KeystoreResult
from ..models.codegen import GeneratedProject
from ..models.project import Project
from ..services.codegen import CodegenInput, CodegenService
from ..services.packaging import PackagingInput, PackagingService
from ..services.renderer import UiTreeRenderer
from ..services.signing import KeystoreInput, KeystoreService
from ..storage import LocalStorageBackend, StorageBackend

logger = get_logger(__name__)

STAGE_CODEGEN = "codegen"
STAGE_SIGNING = "signing"
STAGE_PACKAGING = "packaging"

_WHITESPACE = re.compile(r"\s+")


def new_run_id() -> str:
    """Request-unique run identifier: millisecond timestamp plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def apk_filename(project: Project) -> str:
    """Suggested download name for a project's artifact."""
    return f"{_WHITESPACE.sub('_', project.name)}-{project.version}.apk"


class BuildPipeline:
    """High-level build interface for programmatic use."""

    def __init__(self, storage: StorageBackend, config: Config | None = None) -> None:
        """Initialize the pipeline.

        Args:
            storage: Storage backend for generated trees and artifacts
            config: Configuration; defaults to the cached environment config
        """
        self.config = config or get_config()
        self.storage = storage
        self.codegen = CodegenService(storage, UiTreeRenderer(max_depth=self.config.render.max_depth))
        self.signing = KeystoreService(storage, self.config.signing)
        self.packaging = PackagingService(storage)

    @classmethod
    def from_config(cls, config: Config | None = None) -> BuildPipeline:
        """Create a pipeline backed by local storage at the configured path."""
        config = config or get_config()
        return cls(LocalStorageBackend(config.storage.base_path), config)

    def _check(self, stage: StageResult, result: ServiceResult[Any], run_id: str) -> Any:
        """Close a stage from a service result, raising on failure."""
        if not result.success:
            stage.mark_failed(result.error or "unknown error")
            raise PipelineError(message=result.error or "unknown error", stage=stage.stage_name, run_id=run_id)
        return result.data

    async def run(self, project: Project, keystore_password: str | None = None) -> BuildResult:
        """Run the complete build.

        Args:
            project: Validated project description
            keystore_password: Password for the generated keystore

        Returns:
            BuildResult with the artifact key, keystore outcome and stage records
        """
        run_id = new_run_id()
        storage_config = self.config.storage
        project_dir = f"{storage_config.projects_prefix}/project_{run_id}"
        result = BuildResult(run_id=run_id, success=False, project_directory=project_dir)

        bind_context(run_id=run_id)
        logger.info("Starting build", app=project.name, package=project.package)

        try:
            # Stage 1: Code generation
            stage = StageResult(stage_name=STAGE_CODEGEN)
            result.stages.append(stage)
            generated: GeneratedProject = self._check(
                stage,
                await self.codegen.generate(CodegenInput(project=project, output_directory=project_dir)),
                run_id,
            )
            stage.mark_completed(generated.keys)

            # Stage 2: Keystore, kept outside the packaged tree
            stage = StageResult(stage_name=STAGE_SIGNING)
            result.stages.append(stage)
            signing_result = await self.signing.generate(KeystoreInput(
                key=f"{storage_config.keystores_prefix}/{run_id}.keystore",
                package_name=project.package,
                password=keystore_password,
            ))
            keystore: KeystoreResult = self._check(stage, signing_result, run_id)
            stage.mark_completed([keystore.key], signing_result.warnings)
            result.keystore = keystore

            # Stage 3: Packaging
            stage = StageResult(stage_name=STAGE_PACKAGING)
            result.stages.append(stage)
            apk_key: str = self._check(
                stage,
                await self.packaging.package(PackagingInput(
                    project_directory=project_dir,
                    run_id=run_id,
                    output_prefix=storage_config.output_prefix,
                )),
                run_id,
            )
            stage.mark_completed([apk_key])

            result.apk_key = apk_key
            result.apk_filename = apk_filename(project)
            result.success = True
            logger.info("Build completed", apk=apk_key, keystore=keystore.outcome.value)

        except PipelineError as e:
            logger.error("Build failed", stage=e.stage, error=e.message)
            result.error = e.message
            result.failed_stage = e.stage

        except (ZeroAppError, OSError) as e:
            logger.exception("Build failed")
            result.error = str(e)
            result.failed_stage = result.stages[-1].stage_name if result.stages else None
            if result.stages:
                result.stages[-1].mark_failed(str(e))

        finally:
            result.completed_at = utc_now()
            clear_context()

        return result


async def run_build(project: Project, keystore_password: str | None = None, config: Config | None = None) -> BuildResult:
    """Convenience function to run a build against local storage.

    Args:
        project: Validated project description
        keystore_password: Password for the generated keystore
        config: Configuration override

    Returns:
        BuildResult of the run
    """
    return await BuildPipeline.from_config(config).run(project, keystore_password)
