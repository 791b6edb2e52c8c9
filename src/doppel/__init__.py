"""
Doppel: duplicate file finder with safe deletion.

Core features:
- Directory listing or full tree scan with deterministic ordering
- FNV-1a (default) or xxHash64 content digests
- Duplicate groups with wasted-space accounting
- Safety gate that refuses to delete system, home, mount-point and virtual-fs paths
- CLI interface for headless usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("doppel")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    try:
        with open("pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except OSError:
        __version__ = "0.0.0"

# Public API, only what users should import directly
from doppel.commands import ScanCommand
from doppel.core import (
    ScanParams, HashAlgorithmName, Entry, DuplicateGroup,
    DeletionStatus, DeletionRequest, DeletionResult, FileSafety,
    FileScannerImpl, DuplicateFinder)
from doppel.utils.convert_utils import ConvertUtils
from doppel.services import DeletionGate, FileService

__all__ = [
    "ScanCommand",
    "ScanParams",
    "HashAlgorithmName",
    "Entry",
    "DuplicateGroup",
    "DeletionStatus",
    "DeletionRequest",
    "DeletionResult",
    "FileSafety",
    "FileScannerImpl",
    "DuplicateFinder",
    "ConvertUtils",
    "DeletionGate",
    "FileService",
    "__version__",
]
