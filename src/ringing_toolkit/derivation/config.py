"""
Module: derivation.config

Purpose:
    Configuration dataclass for the derivation pipeline. Provides
    immutable settings for music scoring and timing instrumentation.

Key Classes:
    - DerivationConfig: Main configuration for derivation

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - derivation.pipeline: Uses DerivationConfig for pipeline settings
    - derivation.expansion: Passes music settings to the highlighter
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DerivationConfig:
    """
    Configuration for the derivation pipeline.

    Attributes:
        music_min_run_length: Shortest run at the front or back of a row
            that counts as music (default 4)
        record_timings: Record per-phase durations on the DerivedState
            (default False)

    Invariants:
        - music_min_run_length >= 2

    Example:
        >>> DerivationConfig(music_min_run_length=5).music_min_run_length
        5
    """
    music_min_run_length: int = 4
    record_timings: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.music_min_run_length < 2:
            raise ValueError(
                f"music_min_run_length must be >= 2: {self.music_min_run_length}"
            )
