"""Serve stored images back from the object store."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.api.upload import get_object_store
from app.core.errors import ApiError
from app.services.storage import ObjectStore

router = APIRouter()

IMMUTABLE_CACHE = "public, max-age=31536000, immutable"


@router.get("/{filename}")
def get_image(
    filename: str,
    store: Annotated[ObjectStore, Depends(get_object_store)],
) -> Response:
    """Return the image bytes with their stored content type; keys never change, so cache for a year."""
    stored = store.get(filename)
    if stored is None:
        raise ApiError.not_found("Image not found")
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={"Cache-Control": IMMUTABLE_CACHE, "ETag": stored.etag},
    )
