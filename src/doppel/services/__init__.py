"""Filesystem removal and the deletion safety gate."""

from .file_service import FileService
from .deletion_gate import DeletionGate

__all__ = ["FileService", "DeletionGate"]
