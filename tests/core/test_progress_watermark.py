"""
Test suite for the monotonic progress watermark.

System role: Verification of progress monotonicity
"""

import pytest

from repo_audit.core.indexing.progress import ProgressWatermark


class TestProgressWatermark:
    """Test suite for ProgressWatermark."""

    def test_advance_should_report_increasing_fractions(self) -> None:
        # Arrange
        watermark = ProgressWatermark(total=4)

        # Act
        reported = [watermark.advance(1) for _ in range(4)]

        # Assert
        assert reported == [0.25, 0.5, 0.75, 1.0]

    def test_advance_should_end_at_exactly_one(self) -> None:
        """Test uneven totals still finish on 1.0."""
        watermark = ProgressWatermark(total=3)

        watermark.advance(1)
        watermark.advance(1)

        assert watermark.advance(1) == 1.0

    def test_advance_should_suppress_non_increasing_values(self) -> None:
        """Test zero-item advances and advances past completion report nothing."""
        watermark = ProgressWatermark(total=2)

        assert watermark.advance(0) is None
        assert watermark.advance(2) == 1.0
        assert watermark.advance(1) is None
        assert watermark.last_reported == 1.0

    def test_watermarks_should_not_share_state(self) -> None:
        """Test two runs keep independent watermarks."""
        first = ProgressWatermark(total=2)
        second = ProgressWatermark(total=2)

        first.advance(2)

        assert second.advance(1) == 0.5

    @pytest.mark.parametrize("total", [0, -3])
    def test_watermark_should_reject_non_positive_total(self, total: int) -> None:
        with pytest.raises(ValueError):
            ProgressWatermark(total=total)
