"""
File-system access for the page and file handlers.

Every name is resolved against a root directory, and anything that would
escape the root (``../../etc/passwd``) is treated as missing:

    full_path = (root / name).resolve()
    full_path.relative_to(root)  # raises ValueError if outside root
"""

from pathlib import Path
from typing import List, Optional, Union
import logging


logger = logging.getLogger(__name__)


class FileSystem:
    """
    Read-only view of one directory tree.

    Usage:
        www = FileSystem("www")
        template = www.read_file("root.html")
        names = www.list_directory()
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def resolve(self, name: str) -> Optional[Path]:
        """
        Absolute path for name, or None if it points outside the root or
        is not a valid path at all (embedded NUL, too long).
        """
        try:
            full_path = (self.root / name).resolve()
        except (OSError, ValueError) as e:
            logger.warning(f"Invalid path {name!r}: {e}")
            return None

        try:
            full_path.relative_to(self.root)
        except ValueError:
            logger.warning(f"Path traversal attempt: {name}")
            return None
        return full_path

    def exists(self, name: str) -> bool:
        """True if name exists under the root (file or directory)."""
        full_path = self.resolve(name)
        if full_path is None:
            return False
        try:
            return full_path.exists()
        except OSError:
            return False

    def read_file(self, name: str) -> bytes:
        """
        Read a whole file.

        Raises:
            FileNotFoundError: name is missing, is a directory, or lies
                               outside the root.
        """
        full_path = self.resolve(name)
        if full_path is None or not full_path.is_file():
            raise FileNotFoundError(f"No such file: {name}")
        return full_path.read_bytes()

    def list_directory(self, name: str = ".") -> List[str]:
        """
        Sorted entry names of a directory.

        Returns an empty list if the directory cannot be listed.
        """
        full_path = self.resolve(name)
        if full_path is None:
            return []
        try:
            return sorted(entry.name for entry in full_path.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list {full_path}: {e}")
            return []
