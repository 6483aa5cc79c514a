"""Diagnostics returned alongside every conversion result."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(str, Enum):
    UNSUPPORTED_TYPE = "unsupported_type"
    UNSUPPORTED_UNIT = "unsupported_unit"
    UNIT_ASSUMED = "unit_assumed"
    READ_ONLY_PROPERTY = "read_only_property"
    BOUNDARY_CONDITIONS = "boundary_conditions"
    STRUCTURE = "structure"


@dataclass(frozen=True)
class Diagnostic:
    """One lossy or rejected conversion step."""

    severity: Severity
    kind: DiagnosticKind
    message: str
    key: str | None = None
    atom_index: int | None = None

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.message}"


class ConversionError(ValueError):
    """Fatal conversion failure; no partial output is produced."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def atom_index(self) -> int | None:
        return self.diagnostic.atom_index

    @property
    def field(self) -> str | None:
        return self.diagnostic.key


@dataclass
class Diagnostics:
    """Ordered collector for the diagnostics of a single conversion call."""

    entries: list[Diagnostic] = field(default_factory=list)

    def warn(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        key: str | None = None,
        atom_index: int | None = None,
    ) -> Diagnostic:
        entry = Diagnostic(Severity.WARNING, kind, message, key=key, atom_index=atom_index)
        self.entries.append(entry)
        return entry

    def fail(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        key: str | None = None,
        atom_index: int | None = None,
    ) -> ConversionError:
        """Record an error entry and return the exception the caller must raise."""

        entry = Diagnostic(Severity.ERROR, kind, message, key=key, atom_index=atom_index)
        self.entries.append(entry)
        return ConversionError(entry)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.entries if d.severity is Severity.WARNING)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.entries if d.severity is Severity.ERROR)

    def of_kind(self, kind: DiagnosticKind) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.entries if d.kind is kind)

    def messages(self) -> tuple[str, ...]:
        return tuple(d.message for d in self.entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Diagnostic:
        return self.entries[index]
