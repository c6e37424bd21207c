"""Image upload endpoint: validate an image file and put it in the object store."""

import logging
import re
import secrets
import string
import time
from typing import Annotated

from fastapi import APIRouter, Depends, Request, UploadFile, status

from app.api.auth import get_current_user
from app.core.config import get_settings
from app.core.errors import ApiError
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ok
from app.schemas.upload import UploadData
from app.services.storage import ObjectStore

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MB
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
_RANDOM_ALPHABET = string.ascii_lowercase + string.digits
_SAFE_EXTENSION = re.compile(r"^[a-z0-9]{1,10}$")


def get_object_store() -> ObjectStore:
    """Dependency: object store rooted at IMAGE_STORAGE_DIR."""
    return ObjectStore(get_settings().IMAGE_STORAGE_DIR)


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def build_object_key(filename: str | None, content_type: str) -> str:
    """Generated key: {millis}-{random}.{ext}; ext from the filename, else from the content type."""
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
    if not _SAFE_EXTENSION.match(ext):
        ext = ALLOWED_IMAGE_TYPES.get(content_type, "jpg")
    suffix = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(6))
    return f"{int(time.time() * 1000)}-{suffix}.{ext}"


@router.post("/image", response_model=ApiResponse[UploadData], response_model_exclude_unset=True)
async def upload_image(
    request: Request,
    store: Annotated[ObjectStore, Depends(get_object_store)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    """
    Accept a multipart image under the `file` field.

    Allowed types: JPEG, PNG, GIF, WebP; at most 5 MB. Returns the path that serves
    the stored image.
    """
    form = await request.form()
    file = form.get("file")
    if file is None or not _is_upload_file(file):
        raise ApiError("NO_FILE", "No file provided")

    content_type = (getattr(file, "content_type", None) or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ApiError("INVALID_TYPE", "File must be JPEG, PNG, GIF, or WebP")

    content = await file.read()
    if len(content) > MAX_IMAGE_BYTES:
        raise ApiError("FILE_TOO_LARGE", "File must be under 5MB")

    key = build_object_key(getattr(file, "filename", None), content_type)
    try:
        store.put(key, content, content_type)
    except OSError as e:
        logger.exception("Image upload failed", extra={"key": key})
        raise ApiError(
            "UPLOAD_FAILED",
            "Failed to upload image",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        ) from e

    return ok(UploadData(url=f"/api/images/{key}", filename=key))
