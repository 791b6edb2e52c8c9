"""
Unit tests for DuplicateFinder.
Verifies hash grouping, in-place duplicate marking and wasted space accounting.
"""
from doppel.core import DuplicateFinder, Entry, DuplicateGroup


def make_entries():
    """A and B share content, C is unique."""
    return [
        Entry(path="/data/A", size=100, hash="H1"),
        Entry(path="/data/B", size=100, hash="H1"),
        Entry(path="/data/C", size=200, hash="H2"),
    ]


class TestFindDuplicates:
    """Test grouping by content hash."""

    def test_groups_identical_hashes(self):
        groups, entries = DuplicateFinder.find_duplicates(make_entries())

        assert len(groups) == 1
        group = groups[0]
        assert group.hash == "H1"
        assert group.size == 100
        assert group.members == [0, 1]
        assert group.wasted_space == 100
        assert [e.path for e in group.resolve(entries)] == ["/data/A", "/data/B"]

    def test_marks_duplicates_in_place(self):
        original = make_entries()
        groups, entries = DuplicateFinder.find_duplicates(original)

        assert entries is original
        assert [e.is_duplicate for e in entries] == [True, True, False]

    def test_total_wasted_space(self):
        groups, _ = DuplicateFinder.find_duplicates(make_entries())
        assert DuplicateFinder.calculate_wasted_space(groups) == 100

    def test_three_copies_waste_two_sizes(self):
        entries = [Entry(path=f"/f{i}", size=1024, hash="SAME") for i in range(3)]
        groups, _ = DuplicateFinder.find_duplicates(entries)

        assert groups[0].count == 3
        assert groups[0].wasted_space == 2048

    def test_idempotent(self):
        """Running the finder twice yields the same groups and flags."""
        groups_first, entries = DuplicateFinder.find_duplicates(make_entries())
        flags_first = [e.is_duplicate for e in entries]

        groups_second, entries = DuplicateFinder.find_duplicates(entries)

        assert groups_first == groups_second
        assert [e.is_duplicate for e in entries] == flags_first

    def test_stale_flag_cleared_for_unique_file(self):
        entries = [
            Entry(path="/a", size=10, hash="X", is_duplicate=True),
            Entry(path="/b", size=10, hash="Y"),
        ]
        groups, entries = DuplicateFinder.find_duplicates(entries)

        assert groups == []
        assert not entries[0].is_duplicate

    def test_groups_in_first_seen_order(self):
        entries = [
            Entry(path="/b1", size=5, hash="B"),
            Entry(path="/a1", size=5, hash="A"),
            Entry(path="/b2", size=5, hash="B"),
            Entry(path="/a2", size=5, hash="A"),
        ]
        groups, _ = DuplicateFinder.find_duplicates(entries)
        assert [g.hash for g in groups] == ["B", "A"]
        assert groups[0].members == [0, 2]


class TestExclusions:
    """Directories, empty files and unhashed files never take part."""

    def test_stale_flag_cleared_for_non_candidates(self):
        """An entry that stopped being a candidate loses a flag left from an earlier pass."""
        entries = [
            Entry(path="/unhashed", size=10, hash="", is_duplicate=True),
            Entry(path="/emptied", size=0, hash="H", is_duplicate=True),
            Entry(path="/f1", size=10, hash="H"),
            Entry(path="/f2", size=10, hash="H"),
        ]
        groups, entries = DuplicateFinder.find_duplicates(entries)

        assert [e.is_duplicate for e in entries] == [False, False, True, True]
        assert groups[0].members == [2, 3]

    def test_excludes_directories_and_parent(self):
        entries = [
            Entry(path="/", size=0, is_directory=True, is_parent=True),
            Entry(path="/dir", size=0, is_directory=True),
            Entry(path="/f1", size=10, hash="H"),
            Entry(path="/f2", size=10, hash="H"),
        ]
        groups, entries = DuplicateFinder.find_duplicates(entries)

        assert groups[0].members == [2, 3]
        assert not entries[0].is_duplicate
        assert not entries[1].is_duplicate

    def test_excludes_zero_byte_files(self):
        entries = [
            Entry(path="/empty1", size=0),
            Entry(path="/empty2", size=0),
        ]
        groups, entries = DuplicateFinder.find_duplicates(entries)

        assert groups == []
        assert not any(e.is_duplicate for e in entries)

    def test_excludes_unhashed_files(self):
        """Files whose hash failed ("" digest) are never grouped together."""
        entries = [
            Entry(path="/unreadable1", size=10, hash=""),
            Entry(path="/unreadable2", size=10, hash=""),
        ]
        groups, _ = DuplicateFinder.find_duplicates(entries)
        assert groups == []

    def test_empty_input(self):
        groups, entries = DuplicateFinder.find_duplicates([])
        assert groups == []
        assert entries == []
        assert DuplicateFinder.calculate_wasted_space(groups) == 0


class TestZeroByteFiles:

    def test_returns_indices_of_empty_regular_files(self):
        entries = [
            Entry(path="/dir", size=0, is_directory=True),
            Entry(path="/empty", size=0),
            Entry(path="/full", size=10, hash="H"),
            Entry(path="/also_empty", size=0),
        ]
        assert DuplicateFinder.find_zero_byte_files(entries) == [1, 3]


class TestSortByWastedSpace:

    def test_largest_savings_first(self):
        small = DuplicateGroup(hash="S", size=10, members=[0, 1])
        large = DuplicateGroup(hash="L", size=1000, members=[2, 3])
        many = DuplicateGroup(hash="M", size=100, members=[4, 5, 6, 7])

        ordered = DuplicateFinder.sort_by_wasted_space([small, large, many])
        assert [g.hash for g in ordered] == ["L", "M", "S"]

    def test_ties_broken_by_hash(self):
        first = DuplicateGroup(hash="BB", size=10, members=[0, 1])
        second = DuplicateGroup(hash="AA", size=10, members=[2, 3])

        ordered = DuplicateFinder.sort_by_wasted_space([first, second])
        assert [g.hash for g in ordered] == ["AA", "BB"]
