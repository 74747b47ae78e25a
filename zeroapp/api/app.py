"""
FastAPI application for ZeroApp Builder.

Exposes project-to-APK generation, keystore and icon uploads, and artifact
downloads over HTTP. Request bodies use the camelCase keys the browser
front-end sends.
"""

from __future__ import annotations

import time
from pathlib import PurePath

from fastapi import FastAPI, File, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .. import __version__
from ..core.config import Config, get_config
from ..core.logging import get_logger, setup_logging
from ..models.build import KeystoreOutcome
from ..models.project import Project
from ..orchestration import BuildPipeline

logger = get_logger(__name__)

APK_MEDIA_TYPE = "application/vnd.android.package-archive"


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateApkRequest(ApiModel):
    project: Project
    keystore_password: str | None = Field(default=None, description="Password for the generated keystore")


class KeystoreSummary(ApiModel):
    outcome: KeystoreOutcome
    detail: str = ""


class GenerateApkResponse(ApiModel):
    success: bool = True
    message: str = "APK generated successfully"
    apk_path: str = Field(description="Download URL path of the artifact")
    apk_filename: str = Field(description="Suggested download file name")
    keystore: KeystoreSummary | None = None


class UploadResponse(ApiModel):
    success: bool = True
    message: str
    keystore_path: str | None = None
    icon_path: str | None = None


class HealthResponse(ApiModel):
    status: str = "running"
    version: str = __version__


def _failure(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def create_app(config: Config | None = None, pipeline: BuildPipeline | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Configuration; defaults to the cached environment config
        pipeline: Build pipeline; defaults to one on local storage

    Returns:
        Configured FastAPI app
    """
    config = config or get_config()
    pipeline = pipeline or BuildPipeline.from_config(config)
    storage = pipeline.storage
    setup_logging(config)

    app = FastAPI(
        title=config.project_name,
        description="Generates Android project sources from an app description",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected invalid request", path=request.url.path, errors=len(exc.errors()))
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid project data",
            errors=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
        )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.post("/api/generate-apk", response_model=GenerateApkResponse)
    async def generate_apk(body: GenerateApkRequest) -> GenerateApkResponse | JSONResponse:
        result = await pipeline.run(body.project, body.keystore_password)
        if not result.success:
            logger.error("APK generation error", run_id=result.run_id, error=result.error)
            return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to generate APK: {result.error}")

        keystore = None
        if result.keystore is not None:
            keystore = KeystoreSummary(outcome=result.keystore.outcome, detail=result.keystore.detail)
        return GenerateApkResponse(
            apk_path=f"/download/{result.apk_basename}",
            apk_filename=result.apk_filename,
            keystore=keystore,
        )

    async def _store_upload(upload: UploadFile) -> str | JSONResponse:
        data = await upload.read(config.server.max_upload_bytes + 1)
        if len(data) > config.server.max_upload_bytes:
            return _failure(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                f"File exceeds {config.server.max_upload_bytes} bytes",
            )
        name = PurePath(upload.filename or "upload").name
        key = f"{config.storage.uploads_prefix}/{int(time.time() * 1000)}-{name}"
        await storage.store_bytes(key, data)
        logger.info("Stored upload", key=key, size_bytes=len(data))
        return key

    @app.post("/api/upload-keystore", response_model=UploadResponse)
    async def upload_keystore(keystore: UploadFile | None = File(default=None)) -> UploadResponse | JSONResponse:
        if keystore is None:
            return _failure(status.HTTP_400_BAD_REQUEST, "No keystore file uploaded")
        stored = await _store_upload(keystore)
        if isinstance(stored, JSONResponse):
            return stored
        return UploadResponse(message="Keystore uploaded successfully", keystore_path=stored)

    @app.post("/api/upload-icon", response_model=UploadResponse)
    async def upload_icon(icon: UploadFile | None = File(default=None)) -> UploadResponse | JSONResponse:
        if icon is None:
            return _failure(status.HTTP_400_BAD_REQUEST, "No icon file uploaded")
        stored = await _store_upload(icon)
        if isinstance(stored, JSONResponse):
            return stored
        return UploadResponse(message="Icon uploaded successfully", icon_path=stored)

    @app.get("/download/{filename}", response_model=None)
    async def download(filename: str, name: str = Query(default="app.apk")) -> FileResponse | PlainTextResponse:
        path = storage.get_local_path(f"{config.storage.output_prefix}/{PurePath(filename).name}")
        if path is None:
            return PlainTextResponse("APK file not found", status_code=status.HTTP_404_NOT_FOUND)
        return FileResponse(path, media_type=APK_MEDIA_TYPE, filename=name)

    return app
