"""Uploads API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from careerpage.routers.deps import get_owner_id
from careerpage.schemas.upload import UploadKind, UploadResult
from careerpage.services.object_store import ObjectStore, get_object_store
from careerpage.services.uploads import UploadGatekeeper

router = APIRouter(tags=["uploads"])


@router.post("/uploads", response_model=UploadResult, status_code=201)
async def upload_asset(
    file: UploadFile = File(...),
    kind: UploadKind = Form(...),
    bucket: str = Form(...),
    owner_id: str = Depends(get_owner_id),
    store: ObjectStore = Depends(get_object_store),
) -> UploadResult:
    """
    Validate an image or video and store it.

    Oversized files are rejected from their declared size before the body is
    read into memory.

    Raises:
        ValidationError (422): Size, type or bucket rule violated; nothing stored.
        StoreError (500): The object store failed.
    """
    gatekeeper = UploadGatekeeper(store)
    if file.size is not None:
        gatekeeper.validate(kind, file.content_type, file.size, bucket)
    data = await file.read()
    url = await gatekeeper.upload(file.filename, file.content_type, data, kind, bucket)
    return UploadResult(url=url)
