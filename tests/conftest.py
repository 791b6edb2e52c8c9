"""
Shared fixtures for scanner, duplicate finder and deletion tests.
Creates isolated temporary directories with controlled test files,
and a fake mount table so safety checks do not depend on the host.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'doppel' package is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from doppel.core.safety import FileSafety


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 2 identical files of 1KB (duplicates)
    - 2 identical files of 2KB (duplicates)
    - 3 unique files (different content)
    - 1 empty file (never hashed, never a duplicate)
    - 1 subdirectory holding a third copy of the 1KB content
    """
    files = {}

    # Duplicate pair #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)
    files["other"] = temp_dir / "other.tmp"
    files["other"].write_bytes(b"E" * 1024)  # same size as pair #1, different content

    # Empty file (0 bytes)
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    # Subdirectory with a third copy of pair #1
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


@pytest.fixture
def fake_mounts(tmp_path, monkeypatch):
    """
    Points FileSafety at a fake mount table and an empty sysfs tree.

    The table mounts "/" as ext4 and /proc as proc. Returns a function
    that appends mount lines and creates the matching mountpoints under
    tmp_path, e.g. add_mount("ram", "tmpfs") -> real path of tmp_path/ram.
    """
    mounts_file = tmp_path / "mounts"
    mounts_file.write_text(
        "/dev/vda1 / ext4 rw,relatime 0 0\n"
        "proc /proc proc rw,nosuid,nodev,noexec 0 0\n"
        "sysfs /sys sysfs rw,nosuid,nodev,noexec 0 0\n"
    )
    sys_block = tmp_path / "sys_block"
    sys_block.mkdir()

    monkeypatch.setattr(FileSafety, "MOUNTS_FILE", str(mounts_file))
    monkeypatch.setattr(FileSafety, "SYS_BLOCK_DIR", str(sys_block))

    def add_mount(name: str, fstype: str, device: str = "none", removable_flag: str = None) -> str:
        mountpoint = Path(os.path.realpath(tmp_path)) / name
        mountpoint.mkdir(parents=True, exist_ok=True)
        with open(mounts_file, "a") as f:
            f.write(f"{device} {mountpoint} {fstype} rw 0 0\n")
        if removable_flag is not None:
            disk = os.path.basename(device).rstrip("0123456789")
            (sys_block / disk).mkdir(exist_ok=True)
            (sys_block / disk / "removable").write_text(removable_flag + "\n")
        return str(mountpoint)

    return add_mount
