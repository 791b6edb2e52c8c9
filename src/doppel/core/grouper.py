"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups scanned entries by content hash and accounts for wasted space.
"""

import logging
from collections import defaultdict
from typing import List, Dict, Tuple

from doppel.core.models import Entry, DuplicateGroup

logger = logging.getLogger(__name__)


class DuplicateFinder:
    """
    Hash-based duplicate detection over a caller-owned entry list.
    Groups reference entries by index; `find_duplicates` marks the
    `is_duplicate` flag in place and hands the list back.
    """

    @staticmethod
    def is_candidate(entry: Entry) -> bool:
        """Only non-empty, hashed regular files can be duplicates."""
        return not entry.is_directory and entry.size > 0 and bool(entry.hash)

    @staticmethod
    def find_duplicates(entries: List[Entry]) -> Tuple[List[DuplicateGroup], List[Entry]]:
        """
        Groups candidate entries by hash.

        Args:
            entries: Scan result; `is_duplicate` is updated in place.

        Returns:
            (groups with 2+ members in first-seen order, the same entry list)
        """
        buckets: Dict[str, List[int]] = defaultdict(list)
        for index, entry in enumerate(entries):
            if DuplicateFinder.is_candidate(entry):
                buckets[entry.hash].append(index)
            else:
                entry.is_duplicate = False

        groups = []
        for digest, members in buckets.items():
            if len(members) < 2:
                # Clears a flag left over from an earlier pass
                entries[members[0]].is_duplicate = False
                continue

            for index in members:
                entries[index].is_duplicate = True

            groups.append(DuplicateGroup(hash=digest, size=entries[members[0]].size, members=members))

        logger.debug(f"Grouping complete. {len(buckets)} unique hash values, {len(groups)} duplicate groups.")
        return groups, entries

    @staticmethod
    def calculate_wasted_space(groups: List[DuplicateGroup]) -> int:
        """Total bytes reclaimable by keeping one file per group."""
        return sum(group.wasted_space for group in groups)

    @staticmethod
    def find_zero_byte_files(entries: List[Entry]) -> List[int]:
        """Indices of regular files with no content (possibly defective)."""
        return [index for index, entry in enumerate(entries) if entry.is_zero_file]

    @staticmethod
    def sort_by_wasted_space(groups: List[DuplicateGroup]) -> List[DuplicateGroup]:
        """Largest savings first; ties broken by hash for stable output."""
        return sorted(groups, key=lambda g: (-g.wasted_space, g.hash))
