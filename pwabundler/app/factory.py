# pwabundler/app/factory.py
from __future__ import annotations
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pwabundler.config.store import ConfigStore
from pwabundler.bundle.service import AssetService
from pwabundler.core.errors import BundlerError, StorageFileNotFoundError, StoragePathError
from pwabundler.core.jsonutils import serializeError
from pwabundler.core.logging import logContext
from pwabundler.extensions.host import RegistryFileHost
from pwabundler.storage.local import LocalFilesystem

__all__ = ["resolveFromProject", "buildAssetService", "createApp"]



def resolveFromProject(projectDir: Path, value: str | Path) -> Path:
    """Relative config paths are taken relative to the host project directory."""
    path = Path(value)
    return path if path.is_absolute() else projectDir / path



def buildAssetService(store: ConfigStore | None = None) -> AssetService:
    """Wires the registry-file host and the local public directory from configuration."""
    from pwabundler.app.config import getBundleSettings, getGlobalConfig
    store = store or getGlobalConfig()

    projectDir = Path(store.get("host.projectDir", "."))
    host = RegistryFileHost(
        resolveFromProject(projectDir, store.get("host.registryFile", "extensions.json5")),
        projectDir=projectDir,
        cacheDir=resolveFromProject(projectDir, store.get("host.cacheDir", "var/cache")),
    )
    storage = LocalFilesystem(resolveFromProject(projectDir, store.get("storage.publicDir", "public")))
    return AssetService(host, storage, getBundleSettings())



def createApp(*, assetService: AssetService | None = None, configureLogs: bool = True) -> FastAPI:
    from pwabundler.app.config import initConfig
    initConfig()
    if configureLogs:
        from pwabundler.core.logging import configureLogging
        configureLogging()

    logger = logging.getLogger(__name__)

    app = FastAPI(title="pwabundler")
    app.state.assetService = assetService or buildAssetService()

    @app.middleware("http")
    async def _requestLogContext(request: Request, callNext):
        with logContext(requestPath=request.url.path):
            return await callNext(request)

    @app.exception_handler(StorageFileNotFoundError)
    async def _notFound(_request: Request, err: StorageFileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": serializeError(err)})

    @app.exception_handler(StoragePathError)
    async def _badPath(_request: Request, err: StoragePathError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": serializeError(err)})

    @app.exception_handler(BundlerError)
    async def _bundlerError(_request: Request, err: BundlerError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": serializeError(err)})

    from pwabundler.app.web import router as webRouter
    app.include_router(webRouter)

    logger.info("pwabundler app created")
    return app
