"""
Local image storage adapter.

Writes uploaded pictures below UPLOAD_PATH and returns the public URL under
which the API serves them (UPLOAD_URL_PREFIX, mounted with StaticFiles).

Layout:
=======
    {UPLOAD_PATH}/
       ├── items/        ← item pictures
       ├── coordinates/  ← coordinate pictures
       └── users/        ← avatars

    Stored name: {uuid4 hex}{extension of the content type}
    Public URL:  {UPLOAD_URL_PREFIX}/{folder}/{stored name}

Writes are plain blocking filesystem writes. Removing a picture that a row
still references waits for the session to commit (delete_after_commit), so a
rolled back request never leaves a row pointing at a missing file.
"""

import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, SessionTransaction

from src.config.settings import settings
from src.shared.core.exceptions import ValidationError
from src.shared.core.logging import get_logger

logger = get_logger("storage")

_EXTENSION_BY_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

_PENDING_DELETES = "storage_pending_deletes"


def _delete_pending(session: Session) -> None:
    # after_commit also fires when a SAVEPOINT is released
    if session.in_nested_transaction():
        return
    for storage, url in session.info.pop(_PENDING_DELETES, []):
        storage.delete(url)


def _forget_pending(session: Session, previous_transaction: SessionTransaction) -> None:
    # savepoint rollbacks leave the outer transaction, and its deletes, alive
    if previous_transaction.parent is None:
        session.info.pop(_PENDING_DELETES, None)


class LocalImageStorage:
    """
    Adapter for picture uploads on the local filesystem.

    Handles:
    - Size and content-type checks
    - Unique file naming per folder
    - Removal of previously stored pictures
    """

    def __init__(
        self,
        base_path: Optional[str] = None,
        url_prefix: Optional[str] = None,
        max_size: Optional[int] = None,
    ):
        self.base_path = Path(base_path or settings.UPLOAD_PATH)
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE

    async def save(self, upload: UploadFile, folder: str) -> str:
        """
        Store an uploaded picture.

        Args:
            upload: Multipart file from the request
            folder: Sub-directory ("items", "coordinates", "users")

        Returns:
            Public URL of the stored picture

        Raises:
            ValidationError: Empty, oversized or non-image upload
        """
        content_type = upload.content_type or ""
        if content_type not in settings.ALLOWED_IMAGE_TYPES or content_type not in _EXTENSION_BY_TYPE:
            raise ValidationError(
                "Unsupported picture type",
                details={"content_type": content_type},
            )

        # one byte past the limit is enough to tell it is too large
        data = await upload.read(self.max_size + 1)
        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > self.max_size:
            raise ValidationError(
                "Uploaded file is too large",
                details={"max_size": self.max_size},
            )

        # extension follows the checked content type, never the client filename
        extension = _EXTENSION_BY_TYPE[content_type]
        name = f"{uuid.uuid4().hex}{extension}"
        directory = self.base_path / folder
        directory.mkdir(parents=True, exist_ok=True)
        (directory / name).write_bytes(data)

        url = f"{self.url_prefix}/{folder}/{name}"
        logger.info("Picture stored", folder=folder, url=url, size=len(data))
        return url

    def delete(self, url: str) -> bool:
        """
        Remove a picture previously returned by save().

        URLs outside url_prefix (external pictures) are ignored.

        Returns:
            True if a file was removed
        """
        if not url or not url.startswith(self.url_prefix + "/"):
            return False

        relative = url[len(self.url_prefix) + 1:]
        path = (self.base_path / relative).resolve()
        if self.base_path.resolve() not in path.parents:
            logger.warning("Refusing to delete outside upload path", url=url)
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Picture delete failed", url=url, error=str(e))
            return False

        logger.info("Picture deleted", url=url)
        return True

    def delete_after_commit(self, session: AsyncSession, url: str) -> None:
        """
        Schedule delete(url) for when `session` commits.

        Dropped if the transaction rolls back instead, so the file stays
        with the row that still references it.
        """
        if not url:
            return

        sync_session = session.sync_session
        if not event.contains(sync_session, "after_commit", _delete_pending):
            event.listen(sync_session, "after_commit", _delete_pending)
            event.listen(sync_session, "after_soft_rollback", _forget_pending)
        sync_session.info.setdefault(_PENDING_DELETES, []).append((self, url))
