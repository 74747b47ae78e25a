"""Unit tests for the packaging service."""

import io
import zipfile

import pytest

from zeroapp.services.packaging import PackagingInput, PackagingService
from zeroapp.services.packaging.service import README_NAME


@pytest.mark.asyncio
class TestPackagingService:
    """Tests for zipping generated trees."""

    async def test_package_tree(self, storage):
        """Test that the artifact holds the tree relative to its root plus a README."""
        await storage.store_text("projects/p1/build.gradle", "// root")
        await storage.store_text("projects/p1/src/main/AndroidManifest.xml", "<manifest />")
        await storage.store_text("projects/p2/build.gradle", "// other run")

        service = PackagingService(storage)
        result = await service.package(PackagingInput(project_directory="projects/p1", run_id="r1"))

        assert result.success
        assert result.data == "output/app-r1.apk"
        assert result.metadata["entries"] == 3

        with zipfile.ZipFile(io.BytesIO(await storage.load_bytes(result.data))) as zf:
            assert sorted(zf.namelist()) == [README_NAME, "build.gradle", "src/main/AndroidManifest.xml"]
            assert zf.read("build.gradle") == b"// root"
            assert zf.getinfo("build.gradle").compress_type == zipfile.ZIP_DEFLATED
            assert b"mock APK" in zf.read(README_NAME)

    async def test_custom_output_prefix(self, storage):
        """Test that artifacts are stored under the requested prefix."""
        await storage.store_text("projects/p1/build.gradle", "// root")

        service = PackagingService(storage)
        result = await service.package(PackagingInput(
            project_directory="projects/p1/",
            run_id="r2",
            output_prefix="artifacts",
        ))

        assert result.data == "artifacts/app-r2.apk"
        assert await storage.exists("artifacts/app-r2.apk")

    async def test_empty_tree_fails(self, storage):
        """Test that packaging nothing is an error."""
        service = PackagingService(storage)
        result = await service.package(PackagingInput(project_directory="projects/none", run_id="r3"))

        assert not result.success
        assert "projects/none" in result.error
        assert await storage.list_keys("output") == []
