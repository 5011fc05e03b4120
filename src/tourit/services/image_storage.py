"""Local filesystem storage for post images.

Images live under ``<root>/post_<id>/<random name><ext>`` and are exposed by
the static mount at ``<url_prefix>/post_<id>/<random name><ext>``. File names
are always generated here, never taken from the client.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from tourit.core.errors import ValidationError
from tourit.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredImage:
    """Result of a successful write."""

    path: Path
    url: str


class ImageStorage:
    """Validates and persists uploaded post images on local disk."""

    def __init__(
        self,
        root: Path,
        url_prefix: str,
        max_bytes: int,
        allowed_extensions: list[str],
    ) -> None:
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.max_bytes = max_bytes
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    def validate(self, filename: str | None, content: bytes) -> str:
        """Check presence, size and extension of an upload.

        Args:
            filename: Client-supplied name, used only for its extension.
            content: Raw bytes read from the upload.

        Returns:
            The normalized (lower-case, dotted) extension.

        Raises:
            ValidationError: If the file is missing, empty, too large or of a
                disallowed type.
        """
        if not filename or not content:
            raise ValidationError("No image file provided.")

        if len(content) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            logger.warning("Rejected upload %r: %d bytes is over the limit", filename, len(content))
            raise ValidationError(f"Image file size exceeds the limit ({limit_mb}MB).")

        extension = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
        if not extension or extension not in self.allowed_extensions:
            logger.warning("Rejected upload %r: extension not allowed", filename)
            raise ValidationError("Invalid image file type. Allowed: JPG, PNG, WEBP.")
        return extension

    def post_dir(self, post_id: int) -> Path:
        return self.root / f"post_{post_id}"

    def save(self, post_id: int, content: bytes, extension: str) -> StoredImage:
        """Write ``content`` under the post's directory with a random name."""
        folder = self.post_dir(post_id)
        folder.mkdir(parents=True, exist_ok=True)

        file_name = f"{uuid.uuid4().hex}{extension}"
        path = folder / file_name
        logger.info("Saving image for post %s to %s", post_id, path)
        path.write_bytes(content)
        return StoredImage(path=path, url=f"{self.url_prefix}/{folder.name}/{file_name}")

    def path_for_url(self, url: str) -> Path | None:
        """Map a stored image URL back to its file, or None if it is foreign."""
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            return None
        relative = PurePosixPath(url[len(prefix):])
        if ".." in relative.parts or len(relative.parts) != 2:
            return None
        return self.root.joinpath(*relative.parts)

    def delete(self, path: Path) -> None:
        """Remove a single stored file, logging instead of raising."""
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove image file %s", path, exc_info=True)

    def delete_url(self, url: str | None) -> None:
        if not url:
            return
        path = self.path_for_url(url)
        if path is not None:
            self.delete(path)

    def remove_post_images(self, post_id: int) -> None:
        """Drop every stored image of a post, logging instead of raising."""
        folder = self.post_dir(post_id)
        if not folder.exists():
            return
        try:
            shutil.rmtree(folder)
        except OSError:
            logger.warning("Could not remove image folder %s", folder, exc_info=True)


def get_image_storage() -> ImageStorage:
    """Return an image store built from the current settings."""
    return ImageStorage(
        root=settings.uploads_dir,
        url_prefix=settings.uploads_url_prefix,
        max_bytes=settings.max_image_bytes,
        allowed_extensions=settings.allowed_image_extensions,
    )
