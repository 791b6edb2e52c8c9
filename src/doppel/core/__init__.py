"""
Core engine: scanner, hasher, duplicate finder and deletion safety checks.

This package contains the algorithmic foundation of doppel:
- FileScannerImpl: directory listing / tree walk with deterministic ordering
- FNV1AHashCalculator + XXHashCalculator: streaming 64-bit content digests
- DuplicateFinder: hash grouping, duplicate marking and wasted-space accounting
- FileSafety: system/home/virtual-fs/mount-point/removable-media classification
- Models: Entry, DuplicateGroup, DeletionStatus and configuration objects

All components are pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import DuplicateFinder
from .hasher import FNV1AHashCalculator, XXHashCalculator, create_hash_calculator, fnv1a_64
from .safety import FileSafety
from .models import (
    Entry, DuplicateGroup, DeletionStatus, DeletionRequest, DeletionResult,
    MountInfo, ScanParams, HashAlgorithmName)

__all__ = [
    "FileScannerImpl",
    "DuplicateFinder",
    "FNV1AHashCalculator",
    "XXHashCalculator",
    "create_hash_calculator",
    "fnv1a_64",
    "FileSafety",
    "Entry",
    "DuplicateGroup",
    "DeletionStatus",
    "DeletionRequest",
    "DeletionResult",
    "MountInfo",
    "ScanParams",
    "HashAlgorithmName",
]
