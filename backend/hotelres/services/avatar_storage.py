"""
Avatar file storage on the local filesystem
Objects are addressed by "<user id>/<file name>" paths
"""
from pathlib import Path
from typing import Iterable, List, Optional
import logging

from hotelres.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AvatarStorage:
    """Local directory holding avatar objects, served under base_url"""

    def __init__(self, base_dir: str, base_url: str):
        self.base_dir = Path(base_dir)
        self.base_url = base_url.rstrip("/")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        target = (self.base_dir / path).resolve()
        if self.base_dir.resolve() not in target.parents:
            raise ValidationError(f"Invalid storage path: {path}", field="path")
        return target

    def upload(self, path: str, content: bytes, upsert: bool = True) -> str:
        """Write content at path and return the path"""
        target = self._resolve(path)
        if target.exists() and not upsert:
            raise ValidationError(f"Object already exists: {path}", field="path")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info(f"Stored avatar object {path} ({len(content)} bytes)")
        return path

    def remove(self, paths: Iterable[str]) -> int:
        """Delete the objects that exist; return how many were removed"""
        removed = 0
        for path in paths:
            target = self._resolve(path)
            if target.exists():
                target.unlink()
                removed += 1
        return removed

    def read(self, path: str) -> Optional[bytes]:
        """Object content, or None when it does not exist"""
        target = self._resolve(path)
        return target.read_bytes() if target.exists() else None

    def list_objects(self, folder: str, pattern: str = "*") -> List[str]:
        """Paths of the objects in folder whose name matches pattern"""
        directory = self._resolve(folder)
        if not directory.is_dir():
            return []
        return sorted(f"{folder}/{p.name}" for p in directory.glob(pattern) if p.is_file())

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def get_public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"
