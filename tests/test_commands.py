"""
Tests for ScanCommand: the scan + group workflow shared by every front end.
"""
import pytest

from doppel.commands import ScanCommand
from doppel.core.models import HashAlgorithmName, ScanParams


class TestScanCommand:

    def test_non_recursive_groups(self, temp_dir, test_files):
        command = ScanCommand()
        entries, groups = command.execute(ScanParams(root_dir=str(temp_dir)))

        assert len(entries) == 9
        assert len(groups) == 2
        sizes = sorted(g.size for g in groups)
        assert sizes == [1024, 2048]
        # 1KB pair + 2KB pair
        assert command.wasted_space == 1024 + 2048

    def test_recursive_finds_third_copy(self, temp_dir, test_files):
        command = ScanCommand()
        entries, groups = command.execute(ScanParams(root_dir=str(temp_dir), recursive=True))

        by_size = {g.size: g for g in groups}
        paths = {e.path for e in by_size[1024].resolve(entries)}
        assert paths == {str(test_files["dup1_a"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])}
        assert command.wasted_space == 2 * 1024 + 2048

    def test_duplicate_flags_match_groups(self, temp_dir, test_files):
        command = ScanCommand()
        entries, groups = command.execute(ScanParams(root_dir=str(temp_dir), recursive=True))

        grouped = {i for g in groups for i in g.members}
        for index, entry in enumerate(entries):
            assert entry.is_duplicate == (index in grouped)

    def test_xxhash_finds_same_groups(self, temp_dir, test_files):
        fnv_command = ScanCommand()
        xxh_command = ScanCommand()
        _, fnv_groups = fnv_command.execute(ScanParams(root_dir=str(temp_dir), recursive=True))
        _, xxh_groups = xxh_command.execute(
            ScanParams(root_dir=str(temp_dir), recursive=True, hash_algorithm=HashAlgorithmName.XXHASH))

        assert sorted(g.members for g in fnv_groups) == sorted(g.members for g in xxh_groups)
        assert fnv_command.wasted_space == xxh_command.wasted_space

    def test_zero_byte_files(self, temp_dir, test_files):
        command = ScanCommand()
        command.execute(ScanParams(root_dir=str(temp_dir)))

        zero_files = command.get_zero_byte_files()
        assert [e.path for e in zero_files] == [str(test_files["empty"])]

    def test_parent_entry_passed_through(self, temp_dir, test_files):
        command = ScanCommand()
        entries, _ = command.execute(ScanParams(root_dir=str(temp_dir), include_parent=True))
        assert entries[0].is_parent

    def test_progress_callback_forwarded(self, temp_dir, test_files):
        counts = []
        ScanCommand().execute(ScanParams(root_dir=str(temp_dir)), progress_callback=counts.append)
        assert counts[-1] == 9

    def test_getters_return_copies(self, temp_dir, test_files):
        command = ScanCommand()
        command.execute(ScanParams(root_dir=str(temp_dir)))

        command.get_entries().clear()
        command.get_groups().clear()

        assert len(command.get_entries()) == 9
        assert len(command.get_groups()) == 2

    def test_before_execute(self):
        command = ScanCommand()
        assert command.get_entries() == []
        assert command.wasted_space == 0

    def test_missing_root_yields_nothing(self, tmp_path):
        command = ScanCommand()
        entries, groups = command.execute(ScanParams(root_dir=str(tmp_path / "missing")))
        assert entries == []
        assert groups == []
