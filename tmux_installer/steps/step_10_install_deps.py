from __future__ import annotations

import logging

from ..lib.hostdetect import UNKNOWN
from ..lib.pkg import install_packages, manager_specs, manual_install_hint
from ..pipeline import InstallContext, StepOutcome

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "10_install_dependencies"

    def run(self, ctx: InstallContext) -> StepOutcome:
        if ctx.options.skip_deps:
            return StepOutcome.skipped("dependency installation disabled (--skip-deps)")

        pm = ctx.platform.package_manager
        spec = manager_specs().get(pm) if pm != UNKNOWN else None
        if spec is None:
            # Assume tmux and git are already present and keep going.
            return StepOutcome.warning(manual_install_hint())

        logger.info("Installing dependencies...")
        install_packages(spec, ctx.run, os_family=ctx.platform.os_family)
        return StepOutcome.ok("Dependencies installed successfully!")
