"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path
from typing import List, Optional, Sequence

from natspec_guard.domain.constants import SOLIDITY_SUFFIX
from natspec_guard.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def __init__(self, exclude_paths: Optional[Sequence[str]] = None) -> None:
        self._exclude = tuple(exclude_paths or ())

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def glob_solidity_files(self, path: str) -> List[str]:
        """Get all Solidity files in path (recursive if directory), minus excluded fragments."""
        path_obj = Path(path)
        if path_obj.is_dir():
            found = sorted(str(p) for p in path_obj.glob(f"**/*{SOLIDITY_SUFFIX}"))
            return [p for p in found if not self._is_excluded(p)]
        return [str(path_obj)] if path_obj.suffix == SOLIDITY_SUFFIX else []

    def _is_excluded(self, path: str) -> bool:
        posix = Path(path).as_posix()
        return any(fragment and fragment in posix for fragment in self._exclude)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content, keeping line endings as they are on disk."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)
