"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/safety.py
Pre-deletion safety checks.

CHECK ORDER (first match wins)
------------------------------
1. System path      : exact match with a critical root-level directory
2. Home directory   : exact match with $HOME (unset $HOME never matches)
3. Virtual FS       : path lives on proc/sysfs/tmpfs/... ; an inaccessible
                      path is treated as virtual (fail closed)
4. Mount point      : exact match with a mountpoint from the live mount table
5. Removable media  : advisory only, deletion may proceed after confirmation

The mount table is re-read on every check: mounts and environment may
change between a scan and a deletion request.
"""

import os
import re
import logging
from typing import List, Optional

from doppel.core.models import DeletionStatus, MountInfo

logger = logging.getLogger(__name__)

_OCTAL_ESCAPE = re.compile(r'\\([0-7]{3})')
_SCSI_DISK = re.compile(r'^/dev/(sd[a-z]+)')


class FileSafety:
    """
    Classifies the deletion risk of a path.
    All methods are class-level and stateless; subclass or patch the
    class attributes to point the checks at another mount table or sysfs.
    """

    CRITICAL_PATHS = frozenset({
        "/", "/boot", "/dev", "/etc", "/lib", "/lib64",
        "/proc", "/root", "/run", "/sys", "/usr", "/var",
        "/bin", "/sbin", "/opt", "/srv", "/tmp",
    })

    PROTECTED_FILESYSTEMS = frozenset({
        "proc", "sysfs", "tmpfs", "ramfs", "devpts",
        "securityfs", "cgroup", "cgroup2",
    })

    REMOVABLE_MOUNT_PREFIXES = ("/media", "/mnt", "/run/media")

    MOUNTS_FILE = "/proc/mounts"
    SYS_BLOCK_DIR = "/sys/block"
    HOME_ENV_VAR = "HOME"

    @classmethod
    def check_deletion(cls, path: str) -> DeletionStatus:
        """Returns the most severe status that applies to `path`."""
        normalized = cls.normalize(path)

        if cls.is_system_path(normalized):
            return DeletionStatus.BLOCKED_SYSTEM_PATH

        if cls.is_user_home(normalized):
            return DeletionStatus.BLOCKED_HOME

        mounts = cls.get_mount_points()

        if cls.is_protected_filesystem(normalized, mounts):
            return DeletionStatus.BLOCKED_VIRTUAL_FS

        if cls.is_mount_point(normalized, mounts):
            return DeletionStatus.BLOCKED_MOUNT_POINT

        if cls.is_removable_media(normalized, mounts):
            return DeletionStatus.WARNING_REMOVABLE_MEDIA

        return DeletionStatus.ALLOWED

    @staticmethod
    def get_status_message(status: DeletionStatus, path: str) -> str:
        """One sentence per status, always naming the path."""
        messages = {
            DeletionStatus.ALLOWED: "Deletion allowed: {path}",
            DeletionStatus.BLOCKED_SYSTEM_PATH: "Cannot delete system directory: {path}",
            DeletionStatus.BLOCKED_HOME: "Cannot delete your home directory: {path}",
            DeletionStatus.BLOCKED_MOUNT_POINT: "Cannot delete mount point: {path}",
            DeletionStatus.BLOCKED_VIRTUAL_FS: "Cannot delete virtual/system filesystem: {path}",
            DeletionStatus.WARNING_REMOVABLE_MEDIA: "This is on removable media: {path}",
        }
        return messages.get(status, "Unknown status: {path}").format(path=path)

    @staticmethod
    def normalize(path: str) -> str:
        """Absolute, lexically normalized path (symlinks are not resolved)."""
        return os.path.abspath(path)

    @classmethod
    def is_system_path(cls, path: str) -> bool:
        return path in cls.CRITICAL_PATHS

    @classmethod
    def is_user_home(cls, path: str) -> bool:
        home = os.environ.get(cls.HOME_ENV_VAR)
        if not home:
            return False
        return path == os.path.normpath(home)

    @classmethod
    def is_mount_point(cls, path: str, mounts: Optional[List[MountInfo]] = None) -> bool:
        if mounts is None:
            mounts = cls.get_mount_points()
        return any(mount.mountpoint == path for mount in mounts)

    @classmethod
    def is_protected_filesystem(cls, path: str, mounts: Optional[List[MountInfo]] = None) -> bool:
        try:
            fstype = cls.get_filesystem_type(path, mounts)
        except OSError as e:
            logger.debug(f"Filesystem type query failed for {path}, treating as protected: {e}")
            return True
        return fstype in cls.PROTECTED_FILESYSTEMS

    @classmethod
    def get_filesystem_type(cls, path: str, mounts: Optional[List[MountInfo]] = None) -> str:
        """
        Filesystem type of the mount holding `path`, "" when no mount matches.

        Raises:
            OSError: if `path` cannot be stat'ed
        """
        os.stat(path)
        resolved = os.path.realpath(path)
        if mounts is None:
            mounts = cls.get_mount_points()

        best: Optional[MountInfo] = None
        for mount in mounts:
            # ">=" so the last of several stacked mounts wins, as in the kernel
            if cls._is_within(resolved, mount.mountpoint) and \
                    (best is None or len(mount.mountpoint) >= len(best.mountpoint)):
                best = mount
        return best.fstype if best else ""

    @classmethod
    def is_removable_media(cls, path: str, mounts: Optional[List[MountInfo]] = None) -> bool:
        if mounts is None:
            mounts = cls.get_mount_points()

        for mount in mounts:
            if not cls._is_within(path, mount.mountpoint):
                continue
            if mount.is_removable:
                return True
            if cls._device_is_removable(mount.device):
                return True
        return False

    @classmethod
    def get_mount_points(cls) -> List[MountInfo]:
        """
        Parses the live mount table.
        Returns [] when it cannot be read.
        """
        mounts = []
        try:
            with open(cls.MOUNTS_FILE, 'r', encoding='utf-8', errors='replace') as f:
                for line in f:
                    fields = line.split()
                    if len(fields) < 3:
                        continue
                    device, mountpoint, fstype = (cls._unescape(value) for value in fields[:3])
                    options = fields[3] if len(fields) > 3 else ""
                    mounts.append(MountInfo(
                        device=device,
                        mountpoint=mountpoint,
                        fstype=fstype,
                        options=options,
                        is_root=(mountpoint == "/"),
                        is_removable=any(
                            cls._is_within(mountpoint, prefix) for prefix in cls.REMOVABLE_MOUNT_PREFIXES
                        ),
                    ))
        except OSError as e:
            logger.debug(f"Mount table unavailable ({cls.MOUNTS_FILE}): {e}")
            return []
        return mounts

    @classmethod
    def _device_is_removable(cls, device: str) -> bool:
        """Reads the kernel's removable flag for SCSI disks (/dev/sdb1 -> sdb)."""
        match = _SCSI_DISK.match(device)
        if not match:
            return False
        flag_path = os.path.join(cls.SYS_BLOCK_DIR, match.group(1), "removable")
        try:
            with open(flag_path, 'r') as f:
                return f.read().strip() == "1"
        except OSError:
            return False

    @staticmethod
    def _unescape(value: str) -> str:
        # Mount table escapes whitespace and backslashes as \040, \011, \134 ...
        return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), value)

    @staticmethod
    def _is_within(path: str, directory: str) -> bool:
        """True if `path` equals `directory` or lies below it."""
        if path == directory:
            return True
        return path.startswith(directory.rstrip("/") + "/")
