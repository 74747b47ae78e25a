"""
Keystore Service.

Generates the signing keystore for a project with the JDK ``keytool``. When
keytool cannot produce one, the service either writes a placeholder keystore
and reports the outcome as simulated, or fails, depending on configuration.
"""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, Field

from ...core.config import SigningConfig
from ...core.exceptions import ToolNotFoundError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.build import KeystoreOutcome, KeystoreResult
from ...storage import StorageBackend

logger = get_logger(__name__)

SIMULATED_KEYSTORE_CONTENT = b"MOCK KEYSTORE FILE FOR DEMO\n"


class KeystoreInput(BaseModel):
    """Input for keystore generation."""

    key: str = Field(description="Storage key the keystore is written to")
    package_name: str = Field(description="Application id the key signs")
    password: str | None = Field(default=None, description="Store and key password")


class KeystoreService:
    """Service for generating signing keystores."""

    def __init__(self, storage: StorageBackend, config: SigningConfig | None = None) -> None:
        """Initialize the keystore service.

        Args:
            storage: Storage backend the keystore is written to
            config: Signing configuration
        """
        self.storage = storage
        self.config = config or SigningConfig()

    def _build_command(self, keystore_path: str, password: str) -> list[str]:
        """Build the keytool argument vector."""
        return [
            self.config.keytool_path,
            "-genkey",
            "-v",
            "-keystore", keystore_path,
            "-alias", self.config.key_alias,
            "-keyalg", "RSA",
            "-keysize", str(self.config.key_size),
            "-validity", str(self.config.validity_days),
            "-storepass", password,
            "-keypass", password,
            "-dname", self.config.distinguished_name,
        ]

    async def _run_keytool(self, keystore_path: str, password: str) -> None:
        """Run keytool, raising when it does not produce a keystore."""
        try:
            process = await asyncio.create_subprocess_exec(
                *self._build_command(keystore_path, password),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(
                message="keytool is not available",
                tool_name="keytool",
                expected_path=self.config.keytool_path,
                install_hint="install a JDK and put its bin directory on PATH",
                cause=e,
            ) from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.config.timeout_seconds)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise RuntimeError(f"keytool timed out after {self.config.timeout_seconds}s")

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise RuntimeError(f"keytool exited with status {process.returncode}: {message}")

    async def _simulate(self, input_data: KeystoreInput, reason: str) -> ServiceResult[KeystoreResult]:
        """Write a placeholder keystore, or fail when simulation is disabled."""
        if not self.config.allow_simulated:
            logger.error("Keystore generation failed", reason=reason)
            return ServiceResult.fail(f"Keystore generation failed: {reason}")

        await self.storage.store_bytes(input_data.key, SIMULATED_KEYSTORE_CONTENT)
        logger.warning("Wrote simulated keystore", key=input_data.key, reason=reason)
        result = KeystoreResult(
            outcome=KeystoreOutcome.SIMULATED,
            key=input_data.key,
            alias=self.config.key_alias,
            detail=reason,
        )
        return ServiceResult.with_warnings(result, [f"Simulated keystore: {reason}"])

    async def generate(self, input_data: KeystoreInput) -> ServiceResult[KeystoreResult]:
        """Generate a keystore.

        Args:
            input_data: Keystore input

        Returns:
            ServiceResult containing a KeystoreResult whose outcome says
            whether the file is a genuine keystore or a placeholder
        """
        if not input_data.password:
            return await self._simulate(input_data, "no keystore password supplied")

        # keytool refuses to overwrite an existing alias
        await self.storage.delete(input_data.key)
        keystore_path = self.storage.local_path_for(input_data.key)

        try:
            logger.info("Generating keystore", package=input_data.package_name)
            await self._run_keytool(str(keystore_path), input_data.password)
        except (ToolNotFoundError, RuntimeError) as e:
            return await self._simulate(input_data, str(e))

        logger.info("Keystore generated", key=input_data.key)
        return ServiceResult.ok(KeystoreResult(
            outcome=KeystoreOutcome.GENUINE,
            key=input_data.key,
            alias=self.config.key_alias,
        ))
