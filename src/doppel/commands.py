"""
Unified command orchestrator for scanning and duplicate detection.
This is the SINGLE source of truth for business logic, used by every front end.
Pure Python, no UI dependencies.
"""
import logging
from typing import List, Optional, Tuple

from doppel.core.models import DuplicateGroup, Entry, ScanParams
from doppel.core.interfaces import ProgressCallback
from doppel.core.scanner import FileScannerImpl
from doppel.core.grouper import DuplicateFinder
from doppel.core.hasher import create_hash_calculator

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates the scan workflow:
    1. Scan the root directory with the configured hash algorithm
    2. Group hashed files into duplicate groups (marks entries in place)
    3. Sum the wasted space

    Usage:
        params = ScanParams(root_dir="~/Downloads", recursive=True)
        command = ScanCommand()
        entries, groups = command.execute(params, progress_callback=print_count)
        print(command.wasted_space)
    """

    def __init__(self):
        self._entries: List[Entry] = []
        self._groups: List[DuplicateGroup] = []

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[Entry], List[DuplicateGroup]]:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (count: int) -> None, called from the scanning thread

        Returns:
            Tuple of (entries, duplicate_groups); group members index into entries
        """
        scanner = FileScannerImpl(create_hash_calculator(params.hash_algorithm))

        entries = scanner.scan(
            params.root_dir,
            recursive=params.recursive,
            include_parent=params.include_parent,
            progress_callback=progress_callback
        )

        groups, entries = DuplicateFinder.find_duplicates(entries)

        self._entries = entries
        self._groups = groups
        logger.info(f"Scanned {len(entries)} entries, {len(groups)} duplicate groups found")
        return entries, groups

    @property
    def wasted_space(self) -> int:
        return DuplicateFinder.calculate_wasted_space(self._groups)

    def get_entries(self) -> List[Entry]:
        """Get scanned entries after execution."""
        return self._entries.copy()  # Return copy to prevent external mutation

    def get_groups(self) -> List[DuplicateGroup]:
        """Duplicate groups of the last execution; members index into get_entries()."""
        return self._groups.copy()

    def get_zero_byte_files(self) -> List[Entry]:
        return [self._entries[i] for i in DuplicateFinder.find_zero_byte_files(self._entries)]
