"""Trajectory files read and written through chemfiles frames."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from chemfiles import Trajectory

from atomsframe.core.diagnostics import Diagnostics
from atomsframe.core.to_frame import convert_to_frame
from atomsframe.core.to_system import convert_to_system
from atomsframe.core.types import AbstractSystem
from atomsframe.modeling.schema import ConversionConfig


def read_system(
    path: str | Path, step: int = 0, format: str = "", config: ConversionConfig | None = None
) -> tuple[AbstractSystem, Diagnostics]:
    with Trajectory(str(path), "r", format) as trajectory:
        if step < 0 or step >= trajectory.nsteps:
            raise IndexError(f"Step {step} out of range for '{path}' ({trajectory.nsteps} steps).")
        frame = trajectory.read_step(step)
    return convert_to_system(frame, config)


def iter_systems(
    path: str | Path, format: str = "", config: ConversionConfig | None = None
) -> Iterator[tuple[AbstractSystem, Diagnostics]]:
    with Trajectory(str(path), "r", format) as trajectory:
        for step in range(trajectory.nsteps):
            yield convert_to_system(trajectory.read_step(step), config)


def write_systems(
    path: str | Path,
    systems: Iterable[AbstractSystem],
    format: str = "",
    mode: str = "w",
    config: ConversionConfig | None = None,
) -> list[Diagnostics]:
    """Write every system as one step; returns the diagnostics of each conversion.

    All systems are converted before the file is opened, so a structural error
    leaves the destination untouched.
    """

    if mode not in ("w", "a"):
        raise ValueError("mode must be 'w' or 'a'.")
    converted = [convert_to_frame(system, config) for system in systems]
    with Trajectory(str(path), mode, format) as trajectory:
        for frame, _ in converted:
            trajectory.write(frame)
    return [diagnostics for _, diagnostics in converted]
