# pwabundler/app/web.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, Response

from pwabundler.bundle.publisher import artifactPath
from pwabundler.bundle.service import AssetService
from pwabundler.storage.local import LocalFilesystem

router = APIRouter()



def getAssetService(request: Request) -> AssetService:
    return request.app.state.assetService



@router.post("/api/_action/pwa/dump-bundles")
def dumpBundles(checksum: bool = True, service: AssetService = Depends(getAssetService)) -> dict:
    path = service.dumpBundles(useChecksum=checksum)
    return {"buildArtifact": {"path": path, "type": "zip"}}



@router.get("/api/_action/pwa/extensions")
def listExtensions(service: AssetService = Depends(getAssetService)) -> dict:
    extensions, checksum = service.listExtensions()
    return {
        "extensions": [ext.model_dump() for ext in extensions],
        "checksum": checksum,
        "artifact": artifactPath(
            checksum,
            directory=service.settings.artifactDirectory,
            defaultName=service.settings.defaultArtifactName,
        ),
    }



@router.get("/artifacts/{artifactName}")
def serveArtifact(artifactName: str, service: AssetService = Depends(getAssetService)) -> Response:
    if not artifactName.endswith(".zip"):
        raise HTTPException(404, "Unknown artifact.")

    path = f"{service.settings.artifactDirectory}/{artifactName}"
    storage = service.storage
    # Not-found and bad paths surface as StorageError and are mapped by the app's exception handlers
    if isinstance(storage, LocalFilesystem):
        response: Response = FileResponse(storage.localPath(path), media_type="application/zip")
    else:
        response = Response(content=storage.read(path), media_type="application/zip")
    # Names are content-addressed, except the fallback name which is overwritten in place
    if artifactName == f"{service.settings.defaultArtifactName}.zip":
        response.headers["Cache-Control"] = "no-store"
    return response
