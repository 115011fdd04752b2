"""
Monotonic progress watermark.

One instance per indexing run; never shared between runs.

Dependencies: None
System role: Progress monotonicity guard
"""


class ProgressWatermark:
    """Tracks the highest progress fraction reported for one indexing run."""

    def __init__(self, total: int) -> None:
        """
        Args:
            total: Number of items the run will process (must be positive)
        """
        if total <= 0:
            raise ValueError(f"total must be positive, got {total}")
        self.total = total
        self.processed = 0
        self.last_reported = 0.0

    def advance(self, count: int) -> float | None:
        """
        Record processed items and return the new fraction if it should be reported.

        Args:
            count: Items finished since the last call

        Returns:
            float | None: New fraction when strictly above the watermark, else None
        """
        self.processed = min(self.total, self.processed + count)
        fraction = 1.0 if self.processed == self.total else self.processed / self.total
        if fraction > self.last_reported:
            self.last_reported = fraction
            return fraction
        return None
