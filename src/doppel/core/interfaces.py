"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the scanning pipeline.

Key Components:
---------------
- HashCalculator: Computes a digest string for a file's content.
- FileScanner: Walks a directory and returns ordered Entry records.
- PathSafetyChecker: Classifies a path before destructive operations.
- ProgressCallback / ConfirmCallback: Hooks supplied by the front end.
"""

from typing import Protocol, List, Optional, Callable
from doppel.core.models import Entry, DeletionStatus, DeletionRequest


# Called with the number of items processed so far
ProgressCallback = Callable[[int], None]

# Called with (removed, total) while a directory tree is deleted
RemovalProgressCallback = Callable[[int, int], None]

# Front-end hook asked before a deletion that passed the safety checks
ConfirmCallback = Callable[[DeletionRequest], bool]


# ===== Interfaces =====

class HashCalculator(Protocol):
    """
    Interface for file content hashing.

    Implementations must fail soft: an unreadable file yields "" (no hash),
    never an exception.
    """
    def calculate_hash(self, file_path: str) -> str:
        ...


class FileScanner(Protocol):
    """
    Interface for scanning a directory into Entry records.
    """
    def scan(
        self,
        root_path: str,
        recursive: bool = False,
        include_parent: bool = False,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[Entry]:
        """
        Scan a directory.

        Args:
            root_path: Directory to list.
            recursive: Walk the whole subtree instead of direct children.
            include_parent: Prepend a ".." entry (non-recursive scans only).
            progress_callback: Receives the running item count.

        Returns:
            Entries ordered parent first, then directories, then files.
        """
        ...


class PathSafetyChecker(Protocol):
    """
    Interface for pre-deletion path classification.
    """
    def check_deletion(self, path: str) -> DeletionStatus:
        ...

    def get_status_message(self, status: DeletionStatus, path: str) -> str:
        ...
