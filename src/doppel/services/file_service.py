"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem removal primitives.
Deletion is permanent: callers are expected to go through DeletionGate,
which runs the safety checks and asks for confirmation first.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from doppel.core.interfaces import RemovalProgressCallback

logger = logging.getLogger(__name__)


class FileService:
    """
    Permanent file and directory removal with uniform error reporting.
    Every failure is raised as RuntimeError carrying the OS error text.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Removes a single file or symbolic link."""
        path = Path(file_path)

        if not path.exists() and not path.is_symlink():
            raise RuntimeError(f"File not found: {path}")
        if path.is_dir() and not path.is_symlink():
            raise RuntimeError(f"Is a directory: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e
        logger.info(f"Deleted file: {path}")

    @staticmethod
    def count_items(dir_path: str) -> int:
        """
        Number of files and directories below `dir_path` (the directory
        itself not included). Unreadable subtrees are skipped.
        """
        total = 0
        for _, dirs, files in os.walk(dir_path):
            total += len(dirs) + len(files)
        return total

    @staticmethod
    def is_empty_directory(dir_path: str) -> bool:
        try:
            with os.scandir(dir_path) as it:
                return next(it, None) is None
        except OSError:
            return False

    @classmethod
    def delete_directory(
            cls,
            dir_path: str,
            recursive: bool = False,
            progress_callback: Optional[RemovalProgressCallback] = None
    ) -> int:
        """
        Removes a directory.

        Args:
            dir_path: Directory to remove
            recursive: Remove contents too; without it only an empty directory goes
            progress_callback: (removed, total) after each removed item

        Returns:
            Number of removed items, the directory itself included
        """
        path = Path(dir_path)

        if path.is_symlink() or not path.is_dir():
            raise RuntimeError(f"Not a directory: {path}")

        if not recursive:
            try:
                os.rmdir(path)
            except OSError as e:
                raise RuntimeError(f"Failed to delete directory: {e}") from e
            logger.info(f"Deleted directory: {path}")
            return 1

        total = cls.count_items(str(path)) + 1
        removed = 0

        def on_error(error: OSError):
            raise error

        try:
            # Bottom-up, so every directory is empty by the time it is removed
            for root, dirs, files in os.walk(path, topdown=False, onerror=on_error):
                for name in files:
                    os.remove(os.path.join(root, name))
                    removed += 1
                    if progress_callback:
                        progress_callback(removed, total)
                for name in dirs:
                    child = os.path.join(root, name)
                    # Symlinks to directories are unlinked, never followed
                    if os.path.islink(child):
                        os.remove(child)
                    else:
                        os.rmdir(child)
                    removed += 1
                    if progress_callback:
                        progress_callback(removed, total)

            os.rmdir(path)
            removed += 1
            if progress_callback:
                progress_callback(removed, total)
        except OSError as e:
            raise RuntimeError(
                f"Failed to delete directory after removing {removed} of {total} items: {e}"
            ) from e

        logger.info(f"Deleted directory tree: {path} ({removed} items)")
        return removed
