from doppel.core.models import HashAlgorithmName

HASH_ALIASES = {
    "fnv1a": HashAlgorithmName.FNV1A,
    "fnv": HashAlgorithmName.FNV1A,
    "xxhash": HashAlgorithmName.XXHASH,
    "xxh64": HashAlgorithmName.XXHASH,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content hash used to compare files:\n"
    "  fnv1a, fnv   : 64-bit FNV-1a (default)\n"
    "  xxhash, xxh64: xxHash64, much faster on large trees\n"
    "Example        : %(prog)s -p ~/Downloads -r --hash xxhash\n"
)

EPILOG_TEXT = """
Examples:
  List the current directory and its duplicates
  %(prog)s

  Scan a whole tree for duplicates
  %(prog)s -p ~/Downloads -r

  Also list zero-byte (possibly defective) files
  %(prog)s -p ~/Downloads -r --zero-files

  Delete a file or directory after the safety checks (asks for confirmation)
  %(prog)s --delete ~/Downloads/old_copy

  Same as above without confirmation (for scripts)
  %(prog)s --delete ~/Downloads/old_copy --force
"""
