"""
Test suite for the greedy chunk packer.

Covers budget packing, oversized files, empty input, ordering and the
content-only file count carried by every chunk.

System role: Verification of bounded-size chunk packing
"""

import pytest

from repo_audit.core.chunking.estimator import estimate_tokens
from repo_audit.core.chunking.packer import pack_files


class TestPackFilesBudget:
    """Test suite for packing within the token budget."""

    def test_pack_should_keep_files_together_while_under_budget(self, make_file) -> None:
        """Test 8000/4000/100 char files fit one 4000-token chunk."""
        # Arrange
        files = [make_file("a.py", 8000), make_file("b.py", 4000), make_file("c.py", 100)]

        # Act
        chunks = pack_files(files, max_chunk_tokens=4000)

        # Assert
        assert len(chunks) == 1
        assert [f.path for f in chunks[0].files] == ["a.py", "b.py", "c.py"]
        assert chunks[0].total_files == 3

    def test_pack_should_give_oversized_files_their_own_chunk(self, make_file) -> None:
        """Test files above the budget are never split."""
        # Arrange
        files = [make_file("big1.py", 20000), make_file("big2.py", 20000)]

        # Act
        chunks = pack_files(files, max_chunk_tokens=4000)

        # Assert
        assert len(chunks) == 2
        assert [len(c.files) for c in chunks] == [1, 1]
        assert chunks[0].files[0].content == files[0].content

    def test_pack_should_start_new_chunk_when_next_file_overflows(self, make_file) -> None:
        """Test the closing rule: add the file only if the total stays within budget."""
        # Arrange
        files = [make_file("a.py", 12000), make_file("b.py", 4004), make_file("c.py", 4)]

        # Act
        chunks = pack_files(files, max_chunk_tokens=4000)

        # Assert
        assert [[f.path for f in c.files] for c in chunks] == [["a.py"], ["b.py", "c.py"]]

    def test_pack_should_allow_chunk_exactly_at_budget(self, make_file) -> None:
        """Test a chunk summing to exactly the budget stays whole."""
        files = [make_file("a.py", 8000), make_file("b.py", 8000)]

        chunks = pack_files(files, max_chunk_tokens=4000)

        assert len(chunks) == 1


class TestPackFilesEdgeCases:
    """Test suite for packer edge cases."""

    def test_pack_should_return_no_chunks_for_empty_input(self) -> None:
        """Test empty file list yields zero chunks."""
        assert pack_files([], max_chunk_tokens=4000) == []

    def test_pack_should_drop_files_without_content(self, make_file) -> None:
        """Test directories and empty files are not packed or counted."""
        # Arrange
        files = [
            make_file("src/"),
            make_file("a.py", 10),
            make_file("empty.py", content=""),
            make_file("b.py", 10),
        ]

        # Act
        chunks = pack_files(files)

        # Assert
        assert len(chunks) == 1
        assert [f.path for f in chunks[0].files] == ["a.py", "b.py"]
        assert chunks[0].total_files == 2

    def test_pack_should_return_no_chunks_when_nothing_has_content(self, make_file) -> None:
        """Test a list of content-less files packs to nothing."""
        assert pack_files([make_file("a/"), make_file("b/")]) == []

    @pytest.mark.parametrize("budget", [0, -1])
    def test_pack_should_reject_non_positive_budget(self, make_file, budget: int) -> None:
        """Test the budget must be positive."""
        with pytest.raises(ValueError):
            pack_files([make_file("a.py", 10)], max_chunk_tokens=budget)


class TestPackFilesInvariants:
    """Test suite for order, coverage and indexing invariants."""

    @pytest.fixture
    def mixed_files(self, make_file):
        sizes = [3000, 9000, 100, 17000, 0, 2500, 6000, 40, 16001, 1200]
        return [make_file(f"f{i}.py", content="y" * size) for i, size in enumerate(sizes)]

    def test_pack_should_reproduce_input_order_when_concatenated(self, mixed_files) -> None:
        """Test concatenating chunk files yields the content-bearing input in order."""
        chunks = pack_files(mixed_files, max_chunk_tokens=4000)

        flattened = [f for chunk in chunks for f in chunk.files]

        assert flattened == [f for f in mixed_files if f.content]

    def test_pack_should_number_chunks_densely(self, mixed_files) -> None:
        """Test chunk indices run 0..N-1."""
        chunks = pack_files(mixed_files, max_chunk_tokens=4000)

        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))

    def test_pack_should_respect_budget_for_multi_file_chunks(self, mixed_files) -> None:
        """Test only single-file chunks may exceed the budget."""
        chunks = pack_files(mixed_files, max_chunk_tokens=4000)

        for chunk in chunks:
            if len(chunk.files) > 1:
                assert sum(estimate_tokens(f.content) for f in chunk.files) <= 4000

    def test_pack_should_carry_same_total_on_every_chunk(self, mixed_files) -> None:
        """Test total_files is the content-bearing count everywhere."""
        chunks = pack_files(mixed_files, max_chunk_tokens=4000)

        assert {c.total_files for c in chunks} == {9}

    def test_pack_should_be_deterministic(self, mixed_files) -> None:
        """Test packing the same input twice gives identical chunks."""
        assert pack_files(mixed_files, 4000) == pack_files(list(mixed_files), 4000)
