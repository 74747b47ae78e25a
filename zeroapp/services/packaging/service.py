"""
Packaging Service.

Bundles a generated project tree into the downloadable artifact. No compiler
or signer runs here: the ".apk" is a zip of the sources plus a README saying so.
"""

from __future__ import annotations

import io
import zipfile

from pydantic import BaseModel, Field

from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...storage import StorageBackend

logger = get_logger(__name__)

README_NAME = "README.txt"
README_CONTENT = (
    "This is a mock APK file created by ZeroApp Builder for demonstration purposes.\n"
    "It contains the generated Android project sources; build them with Gradle to obtain an installable package.\n"
)


class PackagingInput(BaseModel):
    """Input for packaging."""

    project_directory: str = Field(description="Storage key prefix of the generated tree")
    run_id: str = Field(description="Build run identifier")
    output_prefix: str = Field(default="output", description="Key prefix for artifacts")


class PackagingService:
    """Service for packaging generated projects."""

    def __init__(self, storage: StorageBackend) -> None:
        self.storage = storage

    async def package(self, input_data: PackagingInput) -> ServiceResult[str]:
        """Zip a generated project tree into the artifact.

        Args:
            input_data: Packaging input

        Returns:
            ServiceResult containing the storage key of the artifact
        """
        prefix = input_data.project_directory.rstrip("/")
        keys = await self.storage.list_keys(prefix)
        if not keys:
            return ServiceResult.fail(f"No generated files under '{prefix}'")

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            for key in keys:
                arcname = key[len(prefix):].lstrip("/")
                zf.writestr(arcname, await self.storage.load_bytes(key))
            zf.writestr(README_NAME, README_CONTENT)

        data = buffer.getvalue()
        apk_key = f"{input_data.output_prefix}/app-{input_data.run_id}.apk"
        await self.storage.store_bytes(apk_key, data)

        logger.info(
            "Packaged artifact",
            key=apk_key,
            entries=len(keys) + 1,
            size_bytes=len(data),
            sha256=self.storage.compute_hash(data),
        )
        return ServiceResult.ok(apk_key, entries=len(keys) + 1, size_bytes=len(data))
