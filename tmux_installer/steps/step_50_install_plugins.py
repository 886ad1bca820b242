from __future__ import annotations

import logging

from ..lib.tmux import install_plugins
from ..pipeline import InstallContext, StepOutcome

logger = logging.getLogger(__name__)


class InstallPluginsStep:
    step_id = "50_install_plugins"

    def run(self, ctx: InstallContext) -> StepOutcome:
        logger.info("Installing tmux plugins...")
        install_plugins(ctx.paths, ctx.run, dry_run=ctx.options.dry_run)
        return StepOutcome.ok("Plugins installed successfully!")
