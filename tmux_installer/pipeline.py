from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol, Sequence

from .lib.command import Runner
from .lib.env import Paths
from .lib.hostdetect import Platform

logger = logging.getLogger(__name__)

OK = "ok"
WARNING = "warning"
SKIPPED = "skipped"


@dataclass(frozen=True)
class InstallOptions:
    skip_deps: bool = False
    skip_backup: bool = False
    force: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class InstallContext:
    platform: Platform
    options: InstallOptions
    paths: Paths
    source_dir: Path
    run: Runner


@dataclass(frozen=True)
class StepOutcome:
    """Result of a step that did not fail fatally.

    Fatal failures are raised (InstallerError); a warning means the run goes on.
    """

    status: str
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> "StepOutcome":
        return cls(OK, message)

    @classmethod
    def warning(cls, message: str) -> "StepOutcome":
        return cls(WARNING, message)

    @classmethod
    def skipped(cls, message: str = "") -> "StepOutcome":
        return cls(SKIPPED, message)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: InstallContext) -> StepOutcome:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]
    warnings: List[str] = field(default_factory=list)


def run_pipeline(*, ctx: InstallContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order. The first exception aborts the run; nothing is rolled back."""

    ran: List[str] = []
    skipped: List[str] = []
    warnings: List[str] = []

    for step in steps:
        logger.debug("Running step %s", step.step_id)
        outcome = step.run(ctx)

        if outcome.status == SKIPPED:
            logger.info("Skipping %s%s", step.step_id, f": {outcome.message}" if outcome.message else "")
            skipped.append(step.step_id)
            continue

        if outcome.status == WARNING:
            logger.warning("%s", outcome.message)
            warnings.append(f"{step.step_id}: {outcome.message}")
        elif outcome.message:
            logger.info("%s", outcome.message)
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped, warnings=warnings)
