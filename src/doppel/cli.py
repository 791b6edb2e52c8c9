#!/usr/bin/env python3
"""
Doppel CLI: command line interface for duplicate detection and safe deletion.
Uses the same core engine as any other front end, with console-based interaction.
Deletion is permanent, so it always goes through the safety gate and a confirmation prompt.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from doppel.core.models import DeletionRequest, DuplicateGroup, Entry, HashAlgorithmName, ScanParams
from doppel.core.grouper import DuplicateFinder
from doppel.commands import ScanCommand
from doppel.services.deletion_gate import DeletionGate
from doppel.utils.convert_utils import ConvertUtils
from doppel.aliases import HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT, EPILOG_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.force: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="doppel",
            description="Doppel: duplicate file finder with safe deletion",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--path", "-p",
            default=None,
            type=str,
            help="Directory to scan. Default: current directory"
        )
        parser.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Scan the whole subtree instead of direct children only"
        )
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="fnv1a",
            type=str,
            help=HASH_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--list", "-l",
            action="store_true",
            help="Print every scanned entry (directories first)"
        )
        parser.add_argument(
            "--parent",
            action="store_true",
            help="Include the parent directory ('..') in --list output (non-recursive scans only)"
        )
        parser.add_argument(
            "--zero-files", "-z",
            action="store_true",
            dest="zero_files",
            help="Report zero-byte (possibly defective) files"
        )

        # Actions
        parser.add_argument(
            "--delete", "-d",
            default=None,
            type=str,
            metavar="PATH",
            help="Delete a file or directory after the safety checks. "
                 "Directories are removed with all their contents."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip the confirmation prompt when used with --delete (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and log messages"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.delete:
            self.error_exit("--force can only be used with --delete")

        # Prevent interactive confirmation in non-TTY environments
        if args.delete and not args.force:
            if not self.is_interactive():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if args.delete:
            return

        if args.path is not None:
            root_path = Path(args.path)
            if not root_path.exists():
                self.error_exit(f"Directory not found: {args.path}")
            if not root_path.is_dir():
                self.error_exit(f"Path is not a directory: {args.path}")

        if args.parent and args.recursive:
            self.warning("--parent is ignored for recursive scans")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            root_dir = args.path if args.path is not None else os.getcwd()
            return ScanParams(
                root_dir=str(Path(root_dir).expanduser().absolute()),
                recursive=args.recursive,
                include_parent=args.parent,
                hash_algorithm=HASH_ALIASES.get(args.hash, HashAlgorithmName.FNV1A)
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, count: int) -> None:
        """CLI progress callback - shows running entry count in console."""
        sys.stderr.write(f"\r  [scanning] {count} entries processed...")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> ScanCommand:
        """Execute scan + duplicate detection."""
        command = ScanCommand()
        if self.verbose:
            print(f"Hashing with {params.hash_algorithm.display_name}...")

        try:
            command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
            if self.verbose:
                sys.stderr.write("\n")
            return command
        except Exception as e:
            self.error_exit(f"Scan failed: {e}")

    def output_entries(self, entries: List[Entry], recursive: bool) -> None:
        """Print the scanned entries in scan order."""
        if self.quiet:
            return

        print("\n--- Entries ---")
        for entry in entries:
            label = entry.path if recursive and not entry.is_parent else entry.display_name
            if entry.is_directory:
                print(f"   {label}")
            else:
                marker = " [DUP]" if entry.is_duplicate else ""
                print(f"   {label} [{ConvertUtils.bytes_to_human(entry.size)}]{marker}")

    def output_zero_files(self, zero_files: List[Entry]) -> None:
        """Report zero-byte files."""
        if self.quiet:
            return

        print("\n--- Zero-byte files ---")
        for entry in zero_files:
            print(f"⚠️  Possibly defective (0 bytes): {entry.path}")
        print(f"Total zero-byte files: {len(zero_files)}")

    def output_results(self, entries: List[Entry], groups: List[DuplicateGroup]) -> None:
        """Output duplicate groups, largest savings first."""
        if self.quiet:
            return

        if not groups:
            print("\nNo duplicate groups found.")
            return

        total_files = sum(g.count for g in groups)
        print(f"\nFound {len(groups)} duplicate groups ({total_files} files)")

        for idx, group in enumerate(DuplicateFinder.sort_by_wasted_space(groups), 1):
            size_str = ConvertUtils.bytes_to_human(group.size)
            wasted_str = ConvertUtils.bytes_to_human(group.wasted_space)
            print(f"\n📁 Group {idx} | Hash: {group.hash} | Size: {size_str} | "
                  f"Files: {group.count} | Wasted: {wasted_str}")
            for entry in group.resolve(entries):
                print(f"   {entry.path}")

        wasted = DuplicateFinder.calculate_wasted_space(groups)
        print(f"\nTotal wasted space: {ConvertUtils.bytes_to_human(wasted)}")

    def confirm_deletion(self, request: DeletionRequest) -> bool:
        """Confirmation prompt handed to the deletion gate."""
        if request.is_removable_warning:
            self.warning(request.message)

        if request.is_directory:
            print(f"Directory: {request.path} ({request.item_count} items including itself)")
        else:
            print(f"File: {request.path}")

        if self.force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
            return True

        # Safety check: confirm we're still in interactive mode
        if not self.is_interactive():
            self.error_exit(
                "Lost interactive terminal during operation. "
                "Use --force to proceed in non-interactive environments."
            )

        question = "Permanently delete this directory and everything in it?" if request.is_directory \
            else "Permanently delete this file?"
        if request.is_removable_warning:
            question = f"The path is on removable media. {question}"
        response = input(f"{question} [y/N]: ")
        return response.strip().lower() in ("y", "yes")

    def removal_progress(self, removed: int, total: int) -> None:
        if self.verbose and total > 0:
            sys.stderr.write(f"\r  [deleting] {removed}/{total} ({removed / total * 100:.1f}%)")
            sys.stderr.flush()

    def execute_delete(self, target: str) -> None:
        """Delete one path through the safety gate."""
        path = str(Path(target).expanduser().absolute())
        is_dir = os.path.isdir(path) and not os.path.islink(path)
        entry = Entry(path=path, size=0, is_directory=is_dir)

        gate = DeletionGate(confirm_callback=self.confirm_deletion)
        result = gate.request_deletion(entry, progress_callback=self.removal_progress)

        if self.verbose:
            sys.stderr.write("\n")

        if result.success:
            if not self.quiet:
                print(f"✅ {result.message}")
        elif result.is_blocked:
            self.error_exit(result.message)
        elif result.cancelled:
            print("Deletion cancelled by user.")
        else:
            self.error_exit(result.message)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def is_interactive() -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.force = args.force

        if self.verbose:
            logging.getLogger().setLevel(logging.INFO)

        self.validate_args(args)

        if args.delete:
            self.execute_delete(args.delete)
            return

        params = self.create_params(args)

        if not self.quiet:
            print(f"Scan directory: {params.root_dir}")

        command = self.run_scan(params)
        entries = command.get_entries()

        if not self.quiet:
            print(f"Scan finished. {len(entries)} entries found.")

        if args.list:
            self.output_entries(entries, recursive=params.recursive)

        if args.zero_files:
            self.output_zero_files(command.get_zero_byte_files())

        self.output_results(entries, command.get_groups())

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
