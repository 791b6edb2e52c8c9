"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory scanning.
Features:
- Lists direct children or walks the whole subtree (os.walk)
- Hashes every non-empty regular file with an injected HashCalculator
- Tolerates unreadable subtrees and vanished files
- Returns entries in a fixed order: parent, directories, files, each by name
"""

import os
import time
import logging
from typing import List, Optional

from doppel.core.models import Entry
from doppel.core.interfaces import FileScanner, HashCalculator, ProgressCallback
from doppel.core.hasher import FNV1AHashCalculator

logger = logging.getLogger(__name__)

# Progress throttling: recursive trees are usually far larger
PROGRESS_INTERVAL = 10
RECURSIVE_PROGRESS_INTERVAL = 100


class FileScannerImpl(FileScanner):
    """
    Scans a directory into a list of Entry records.

    Attributes:
        hash_calculator: Digest used for non-empty regular files
    """

    def __init__(self, hash_calculator: Optional[HashCalculator] = None):
        self.hash_calculator = hash_calculator or FNV1AHashCalculator()

    def scan(self,
             root_path: str,
             recursive: bool = False,
             include_parent: bool = False,
             progress_callback: Optional[ProgressCallback] = None) -> List[Entry]:
        """
        Single-pass scan with throttled progress updates.
        Partial failures are logged and skipped, a missing root yields [].
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Root directory: {root_path} (recursive={recursive}, include_parent={include_parent})")

        if not os.path.isdir(root_path):
            logger.warning(f"Directory does not exist or is not a directory: {root_path}")
            return []

        results: List[Entry] = []

        if include_parent and not recursive:
            parent = self._parent_path(root_path)
            if parent:
                results.append(Entry(path=parent, size=0, is_directory=True, is_parent=True))

        progress_interval = RECURSIVE_PROGRESS_INTERVAL if recursive else PROGRESS_INTERVAL
        processed = 0
        start_time = time.time()

        for top, dirs, files in os.walk(root_path, onerror=self._on_walk_error):
            for name in dirs:
                results.append(self._process_entry(os.path.join(top, name), is_dir=True))
                processed += 1
                if progress_callback and processed % progress_interval == 0:
                    progress_callback(processed)

            for name in files:
                results.append(self._process_entry(os.path.join(top, name), is_dir=False))
                processed += 1
                if progress_callback and processed % progress_interval == 0:
                    progress_callback(processed)

            if not recursive:
                break

        if progress_callback:
            progress_callback(processed)

        results.sort(key=self.sort_key)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. {processed} entries found.")
        return results

    @staticmethod
    def sort_key(entry: Entry):
        """Parent first, then directories before files, then by name."""
        return (not entry.is_parent, not entry.is_directory, entry.name)

    @staticmethod
    def _parent_path(root_path: str) -> str:
        """Parent of `root_path`, or "" for a bare relative name."""
        return os.path.dirname(os.path.normpath(root_path))

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror}")

    def _process_entry(self, path: str, is_dir: bool) -> Entry:
        """
        Builds the Entry for one node.
        Files whose size cannot be read get size 0 and stay unhashed.
        """
        if is_dir:
            return Entry(path=path, size=0, is_directory=True)

        try:
            size = os.stat(path).st_size
        except OSError as e:
            logger.debug(f"Could not get size of {path}: {e}")
            size = 0

        entry = Entry(path=path, size=size)

        # Zero-byte files are equal by size alone, hashing them is wasted I/O
        if size > 0:
            entry.hash = self.hash_calculator.calculate_hash(path)

        return entry
