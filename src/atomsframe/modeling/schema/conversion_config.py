"""Configuration for system/frame conversion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionConfig:
    """Config knobs shared by both conversion directions."""

    keep_zero_velocities: bool = False
    strict_boundaries: bool = False
    expected_dimensionality: int = 3

    def __post_init__(self) -> None:
        if self.expected_dimensionality <= 0:
            raise ValueError("expected_dimensionality must be positive.")
