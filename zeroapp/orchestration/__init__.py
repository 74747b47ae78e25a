"""Build orchestration for ZeroApp Builder."""

from .pipeline import BuildPipeline, apk_filename, new_run_id, run_build

__all__ = [
    "BuildPipeline",
    "apk_filename",
    "new_run_id",
    "run_build",
]
