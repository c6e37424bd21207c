"""Filesystem-backed object store for uploaded images (key -> bytes + content type)."""

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Keys are generated server-side as {timestamp}-{random}.{ext}; anything else is rejected.
_VALID_KEY = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,254}$")
_META_SUFFIX = ".content-type"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class InvalidObjectKeyError(ValueError):
    """Raised when a key could escape the storage directory or is otherwise malformed."""


@dataclass(frozen=True)
class StoredObject:
    key: str
    data: bytes
    content_type: str

    @property
    def etag(self) -> str:
        return f'"{hashlib.md5(self.data).hexdigest()}"'


class ObjectStore:
    """Blob storage rooted at a directory; the content type is kept in a sidecar file."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _VALID_KEY.match(key) or key.endswith(_META_SUFFIX) or ".." in key:
            raise InvalidObjectKeyError(f"Invalid object key: {key!r}")
        return self.root / key

    def put(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        path.with_name(path.name + _META_SUFFIX).write_text(content_type, encoding="utf-8")
        logger.info("Stored object", extra={"key": key, "size": len(data)})

    def get(self, key: str) -> StoredObject | None:
        try:
            path = self._path(key)
        except InvalidObjectKeyError:
            return None
        if not path.is_file():
            return None
        meta = path.with_name(path.name + _META_SUFFIX)
        content_type = (
            meta.read_text(encoding="utf-8").strip() if meta.is_file() else DEFAULT_CONTENT_TYPE
        )
        return StoredObject(key=key, data=path.read_bytes(), content_type=content_type)

    def is_writable(self) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return self.root.is_dir()
