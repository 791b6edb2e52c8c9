"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for directory scanning, duplicate detection and deletion safety.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os
from enum import Enum


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content hash used by the scanner.
    """
    FNV1A = "fnv1a"
    XXHASH = "xxhash"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithmName.FNV1A: "FNV-1a (64 bit)",
            HashAlgorithmName.XXHASH: "xxHash64",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class DeletionStatus(Enum):
    """
    Outcome of a pre-deletion safety check.
    Ordered from most to least catastrophic; only WARNING_REMOVABLE_MEDIA
    and ALLOWED let a deletion proceed.
    """
    ALLOWED = "allowed"
    BLOCKED_SYSTEM_PATH = "blocked-system-path"
    BLOCKED_HOME = "blocked-home"
    BLOCKED_MOUNT_POINT = "blocked-mount-point"
    BLOCKED_VIRTUAL_FS = "blocked-virtual-fs"
    WARNING_REMOVABLE_MEDIA = "warning-removable-media"

    @property
    def is_blocked(self) -> bool:
        return self not in (DeletionStatus.ALLOWED, DeletionStatus.WARNING_REMOVABLE_MEDIA)

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            DeletionStatus.ALLOWED: "Allowed",
            DeletionStatus.BLOCKED_SYSTEM_PATH: "System path",
            DeletionStatus.BLOCKED_HOME: "Home directory",
            DeletionStatus.BLOCKED_MOUNT_POINT: "Mount point",
            DeletionStatus.BLOCKED_VIRTUAL_FS: "Virtual filesystem",
            DeletionStatus.WARNING_REMOVABLE_MEDIA: "Removable media",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass
class Entry:
    """
    One filesystem node discovered by a scan.
    Only `hash` and `is_duplicate` change after the scanner creates it.
    """
    path: str
    size: int  # in bytes, 0 for directories
    is_directory: bool = False
    is_parent: bool = False  # synthesized ".." entry
    hash: str = ""
    is_duplicate: bool = False

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"Size cannot be negative: {self.size}")
        if self.is_parent and not self.is_directory:
            raise ValueError("Parent entry must be a directory")
        if self.is_directory and self.hash:
            raise ValueError("Directories cannot carry a content hash")

    @property
    def name(self) -> str:
        """Final path segment."""
        return os.path.basename(os.path.normpath(self.path))

    @property
    def display_name(self) -> str:
        """
        Name shown to the user: ".." for the parent entry, a trailing
        separator for directories, the full path for root-like paths.
        """
        if self.is_parent:
            return ".."
        name = os.path.basename(self.path.rstrip(os.sep))
        if not name and self.is_directory:
            return self.path
        return name + os.sep if self.is_directory else name

    @property
    def is_zero_file(self) -> bool:
        """True for regular files with no content (possibly defective)."""
        return self.size == 0 and not self.is_directory

    def __repr__(self):
        return f"<Entry path={self.path}, size={self.size}, dir={self.is_directory}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one digest.
    Members are indices into the entry list the group was built from,
    so the group stays valid only until that list is modified.
    """
    hash: str
    size: int
    members: List[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def wasted_space(self) -> int:
        """Bytes reclaimable by keeping a single copy."""
        if not self.members:
            return 0
        return (len(self.members) - 1) * self.size

    def resolve(self, entries: List[Entry]) -> List[Entry]:
        """Return the member entries from the list the group was built from."""
        return [entries[index] for index in self.members]

    def __repr__(self):
        return f"<DuplicateGroup hash={self.hash}, size={self.size}, count={self.count}>"


@dataclass
class MountInfo:
    """One row of the live mount table."""
    device: str
    mountpoint: str
    fstype: str
    options: str = ""
    is_root: bool = False
    is_removable: bool = False


@dataclass
class DeletionRequest:
    """What the front end is asked to confirm before anything is removed."""
    path: str
    status: DeletionStatus
    message: str
    is_directory: bool = False
    item_count: int = 1

    @property
    def is_removable_warning(self) -> bool:
        return self.status == DeletionStatus.WARNING_REMOVABLE_MEDIA


@dataclass
class DeletionResult:
    """
    Outcome of a deletion attempt. Failures are reported here, never raised.
    `status` is None when the request was refused before classification
    (the parent directory entry).
    """
    success: bool
    status: Optional[DeletionStatus]
    message: str
    removed_count: int = 0
    cancelled: bool = False  # declined at the confirmation prompt

    @property
    def is_blocked(self) -> bool:
        return self.status is not None and self.status.is_blocked

    def __bool__(self) -> bool:
        return self.success


"""
DTO for scan parameters with built-in validation.
Interface-agnostic, used by the CLI and any other front end.
"""

@dataclass
class ScanParams:
    """Parameters for a scan + duplicate detection run."""
    root_dir: str
    recursive: bool = False
    include_parent: bool = False
    hash_algorithm: HashAlgorithmName = HashAlgorithmName.FNV1A

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir or not str(self.root_dir).strip():
            raise ValueError("Root directory cannot be empty")

        if isinstance(self.hash_algorithm, str):
            try:
                self.hash_algorithm = HashAlgorithmName(self.hash_algorithm.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown hash algorithm: '{self.hash_algorithm}'")
