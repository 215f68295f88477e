"""Classified, non-fatal diagnostics emitted while walking and sizing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from lrg.errors import ErrorKind, classify, kind_of

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Where a diagnostic originated."""

    WALK = "walk"
    METADATA = "metadata"


# Walk failures drop a node; metadata failures only degrade a size.
_STAGE_SEVERITY: dict[Stage, int] = {
    Stage.WALK: logging.ERROR,
    Stage.METADATA: logging.WARNING,
}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single per-node failure.

    Attributes:
        path: Path of the node that failed.
        kind: Classified cause, ``None`` when it has no stable label.
        label: Stable human-readable label for ``kind``.
        stage: Whether the failure happened during the walk or while
            resolving metadata.
        error: The original exception, kept for callers that want detail.
    """

    path: Path
    kind: ErrorKind | None
    label: str
    stage: Stage
    error: BaseException | None = None

    @property
    def severity(self) -> int:
        """``logging`` level matching the stage."""
        return _STAGE_SEVERITY[self.stage]

    @classmethod
    def from_exception(cls, path: Path, exc: BaseException, stage: Stage) -> Diagnostic:
        kind = kind_of(exc)
        return cls(path=path, kind=kind, label=classify(kind), stage=stage, error=exc)


Reporter = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default reporter: log the diagnostic at its stage's severity."""
    logger.log(
        diagnostic.severity,
        "%s failed for '%s': %s",
        diagnostic.stage.value,
        diagnostic.path,
        diagnostic.label,
    )


class DiagnosticCollector:
    """Reporter that keeps every diagnostic it receives.

    Useful for embedding callers that want to inspect failures after a walk
    instead of streaming them.
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def for_stage(self, stage: Stage) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.stage is stage]
