"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/deletion_gate.py
Single path to destructive operations: safety check → confirmation → removal.
"""
import os
import logging
from typing import Optional

from doppel.core.interfaces import ConfirmCallback, PathSafetyChecker, RemovalProgressCallback
from doppel.core.models import DeletionRequest, DeletionResult, Entry
from doppel.core.safety import FileSafety
from doppel.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeletionGate:
    """
    Orchestrates a deletion for the front end.

    Usage:
        gate = DeletionGate(confirm_callback=ask_user)
        result = gate.request_deletion(entry)
        if not result:
            show_error(result.message)

    Blocked paths are rejected without a prompt. Paths that pass (including
    removable media, flagged in the request) are removed only if
    `confirm_callback` returns True. Nothing here raises on I/O failure.
    """

    def __init__(self, confirm_callback: ConfirmCallback, safety: PathSafetyChecker = FileSafety):
        self.confirm_callback = confirm_callback
        self.safety = safety

    def request_deletion(
            self,
            entry: Entry,
            progress_callback: Optional[RemovalProgressCallback] = None
    ) -> DeletionResult:
        """Deletes a scanned entry (a non-empty directory is removed recursively)."""
        if entry.is_parent:
            # Refused before classification, so there is no status to report
            return DeletionResult(
                success=False,
                status=None,
                message=f"Refusing to delete the parent directory entry: {entry.path}"
            )
        # A symlink to a directory is unlinked, its target is left alone
        if entry.is_directory and not os.path.islink(entry.path):
            recursive = not FileService.is_empty_directory(entry.path)
            return self.delete_directory(entry.path, recursive=recursive, progress_callback=progress_callback)
        return self.delete_file(entry.path)

    def delete_file(self, path: str) -> DeletionResult:
        request = self._prepare(path, is_directory=False)
        if isinstance(request, DeletionResult):
            return request

        try:
            FileService.delete_file(path)
        except RuntimeError as e:
            logger.warning(f"Deletion failed for {path}: {e}")
            return DeletionResult(success=False, status=request.status, message=str(e))

        return DeletionResult(success=True, status=request.status, message=f"Deleted: {path}", removed_count=1)

    def delete_directory(
            self,
            path: str,
            recursive: bool = False,
            progress_callback: Optional[RemovalProgressCallback] = None
    ) -> DeletionResult:
        request = self._prepare(path, is_directory=True, recursive=recursive)
        if isinstance(request, DeletionResult):
            return request

        try:
            removed = FileService.delete_directory(path, recursive=recursive, progress_callback=progress_callback)
        except RuntimeError as e:
            logger.warning(f"Deletion failed for {path}: {e}")
            return DeletionResult(success=False, status=request.status, message=str(e))

        return DeletionResult(
            success=True,
            status=request.status,
            message=f"Deleted: {path} ({removed} items)",
            removed_count=removed
        )

    def _prepare(self, path: str, is_directory: bool, recursive: bool = False):
        """
        Runs the safety check and the confirmation prompt.
        Returns the confirmed DeletionRequest, or a failed DeletionResult.
        """
        status = self.safety.check_deletion(path)
        message = self.safety.get_status_message(status, path)

        if status.is_blocked:
            logger.warning(message)
            return DeletionResult(success=False, status=status, message=message)

        # Counted only once the path is known to be deletable
        item_count = FileService.count_items(path) + 1 if recursive else 1
        request = DeletionRequest(
            path=path,
            status=status,
            message=message,
            is_directory=is_directory and not os.path.islink(path),
            item_count=item_count
        )

        if not self.confirm_callback(request):
            logger.info(f"Deletion cancelled by user: {path}")
            return DeletionResult(success=False, status=status, message="Deletion cancelled", cancelled=True)

        return request
