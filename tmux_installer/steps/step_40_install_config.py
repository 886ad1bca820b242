from __future__ import annotations

import logging

from ..lib.assets import deploy_config
from ..pipeline import InstallContext, StepOutcome

logger = logging.getLogger(__name__)


class InstallConfigStep:
    step_id = "40_install_config"

    def run(self, ctx: InstallContext) -> StepOutcome:
        logger.info("Installing tmux configuration...")
        deploy_config(ctx.source_dir, ctx.paths, ctx.platform.os_family, dry_run=ctx.options.dry_run)
        return StepOutcome.ok("Configuration installed successfully!")
