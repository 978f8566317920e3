import secrets
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from app.core.config import settings
from app.core.errors import NotFoundError


class MediaStore:
    """Stores uploaded videos on disk and hands back the generated filename."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def _new_reference(self, original_name: Optional[str]) -> str:
        suffix = Path(original_name or '').suffix
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"

    def save(self, original_name: Optional[str], stream: BinaryIO) -> str:
        self.ensure_root()
        reference = self._new_reference(original_name)
        target = self.root / reference
        with target.open('wb') as handle:
            shutil.copyfileobj(stream, handle)
        logger.info('media.saved', reference=reference, size=target.stat().st_size)
        return reference

    def resolve(self, reference: str) -> Path:
        root = self.root.resolve()
        candidate = (root / reference).resolve()
        if root not in candidate.parents or not candidate.is_file():
            raise NotFoundError('File missing')
        return candidate

    def delete(self, reference: str) -> None:
        target = self.root / reference
        target.unlink(missing_ok=True)
        logger.info('media.deleted', reference=reference)


def get_media_store() -> MediaStore:
    return MediaStore(Path(settings.UPLOAD_DIR))
