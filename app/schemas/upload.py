"""Response schema for the image upload endpoint."""

from pydantic import BaseModel, Field


class UploadData(BaseModel):
    """Location of a stored image."""

    url: str = Field(..., description="Path that serves the image, e.g. /api/images/<filename>")
    filename: str = Field(..., description="Object-store key of the image")
