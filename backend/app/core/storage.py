"""
Blob Storage (local filesystem buckets)

Objects are addressed by (bucket, path). Paths are relative, "/"-separated
and start with the owning user's id, e.g. "<user_id>/1725000000000_ab12cd34.pdf".
"""
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import List, Optional

import aiofiles
import aiofiles.os

from app.core.config import settings
from app.core.exceptions import InvalidInputError, StorageError
from app.core.logging import logger


@dataclass
class StoredObject:
    """Listing entry for a stored blob"""
    path: str
    size: int
    modified_at: datetime


class StorageService:
    """File storage service"""

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.STORAGE_DIR)
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, bucket: str, path: str) -> Path:
        relative = PurePosixPath(path)
        if not path or relative.is_absolute() or ".." in relative.parts:
            raise InvalidInputError(f"Invalid storage path: {path!r}")
        return self.root / bucket / Path(*relative.parts)

    async def upload(self, bucket: str, path: str, data: bytes) -> str:
        """
        Store bytes at bucket/path

        Existing objects are never overwritten.
        """
        target = self._resolve(bucket, path)
        if await aiofiles.os.path.exists(target):
            raise StorageError(f"The resource already exists: {bucket}/{path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, 'xb') as f:
                await f.write(data)
        except OSError as e:
            logger.error(f"Storage upload failed for {bucket}/{path}: {e}")
            raise StorageError(f"Failed to store {bucket}/{path}") from e
        return path

    async def download(self, bucket: str, path: str) -> bytes:
        """Read a stored object"""
        target = self._resolve(bucket, path)
        try:
            async with aiofiles.open(target, 'rb') as f:
                return await f.read()
        except FileNotFoundError as e:
            raise StorageError(f"Object not found: {bucket}/{path}") from e
        except OSError as e:
            logger.error(f"Storage download failed for {bucket}/{path}: {e}")
            raise StorageError(f"Failed to read {bucket}/{path}") from e

    async def remove(self, bucket: str, path: str) -> bool:
        """
        Delete a stored object

        Returns False when the object was already gone; any other failure
        raises StorageError.
        """
        target = self._resolve(bucket, path)
        try:
            await aiofiles.os.remove(target)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Storage remove failed for {bucket}/{path}: {e}")
            raise StorageError(f"Failed to delete {bucket}/{path}") from e

    def list_objects(self, bucket: str, prefix: str = "") -> List[StoredObject]:
        """List objects in a bucket, optionally under a path prefix"""
        bucket_dir = self.root / bucket
        if not bucket_dir.exists():
            return []

        objects = []
        for dirpath, _dirnames, filenames in os.walk(bucket_dir):
            for name in filenames:
                full = Path(dirpath) / name
                relative = full.relative_to(bucket_dir).as_posix()
                if prefix and not relative.startswith(prefix):
                    continue
                stat = full.stat()
                objects.append(StoredObject(
                    path=relative,
                    size=stat.st_size,
                    modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                ))
        return sorted(objects, key=lambda o: o.path)

    def exists(self, bucket: str, path: str) -> bool:
        """Whether an object is stored at bucket/path"""
        return self._resolve(bucket, path).is_file()


_storage: Optional[StorageService] = None


def get_storage() -> StorageService:
    """Shared storage instance (FastAPI dependency)"""
    global _storage
    if _storage is None:
        _storage = StorageService()
    return _storage
