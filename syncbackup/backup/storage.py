"""
Storage handler for sync backups.

LocalStorage exposes the small set of file operations the backup store
needs (exists, resolve, write_file, delete) as coroutines. Blocking
filesystem calls run in worker threads so the event loop never blocks.
"""

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Union


class StorageError(Exception):
    """Raised when storage operation fails."""
    pass


@dataclass
class FileStat:
    """Metadata of a file or directory returned by LocalStorage.resolve()."""
    name: str
    resource: Path
    is_file: bool
    is_directory: bool
    ctime: Optional[float] = None
    """Creation time in epoch seconds, None where the filesystem does not report one."""
    size: int = 0
    children: Optional[List['FileStat']] = field(default=None, repr=False)


def _creation_time(stat_result: os.stat_result) -> Optional[float]:
    # st_ctime is the inode change time on POSIX, so only birth time counts
    return getattr(stat_result, 'st_birthtime', None)


def _to_stat(path: Path) -> FileStat:
    stat_result = path.stat()
    return FileStat(
        name=path.name,
        resource=path,
        is_file=path.is_file(),
        is_directory=path.is_dir(),
        ctime=_creation_time(stat_result),
        size=stat_result.st_size
    )


class LocalStorage:
    """
    Handler for reading and writing backups in the local filesystem.

    Paths are absolute; the caller decides the folder structure.
    """

    async def exists(self, path: Union[str, Path]) -> bool:
        """
        Check whether a file or directory exists.

        Args:
            path: Path to check

        Returns:
            True if the path exists

        Raises:
            StorageError: If the path cannot be inspected
        """
        try:
            return await asyncio.to_thread(Path(path).exists)
        except Exception as e:
            raise StorageError(f"Failed to check {path}: {e}")

    async def resolve(self, path: Union[str, Path]) -> FileStat:
        """
        Stat a path. Directories also get their direct children.

        Args:
            path: Path to resolve

        Returns:
            FileStat for the path, with children populated for directories

        Raises:
            StorageError: If the path is missing or cannot be read
        """
        return await asyncio.to_thread(self._resolve, Path(path))

    def _resolve(self, path: Path) -> FileStat:
        try:
            stat = _to_stat(path)
            if stat.is_directory:
                stat.children = [_to_stat(child) for child in sorted(path.iterdir())]
            return stat
        except FileNotFoundError as e:
            raise StorageError(f"Path not found: {path}: {e}")
        except PermissionError as e:
            raise StorageError(f"Permission denied reading {path}: {e}")
        except Exception as e:
            raise StorageError(f"Failed to resolve {path}: {e}")

    async def write_file(self, path: Union[str, Path], content: bytes):
        """
        Write content to a file, replacing any existing file.

        Args:
            path: Destination path; parent directories are created
            content: Bytes to write

        Raises:
            StorageError: If the write fails
        """
        await asyncio.to_thread(self._write_file, Path(path), content)

    def _write_file(self, path: Path, content: bytes):
        try:
            # Create directory structure
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except PermissionError as e:
            raise StorageError(f"Permission denied writing to {path}: {e}")
        except Exception as e:
            raise StorageError(f"Failed to write {path}: {e}")

    async def delete(self, path: Union[str, Path]):
        """
        Delete a file.

        Args:
            path: File to delete

        Raises:
            StorageError: If the file is missing or deletion fails
        """
        await asyncio.to_thread(self._delete, Path(path))

    def _delete(self, path: Path):
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise StorageError(f"File not found: {path}: {e}")
        except PermissionError as e:
            raise StorageError(f"Permission denied deleting {path}: {e}")
        except Exception as e:
            raise StorageError(f"Failed to delete {path}: {e}")
