from __future__ import annotations

from ..lib.backup import backup_existing_config
from ..pipeline import InstallContext, StepOutcome


class BackupConfigStep:
    step_id = "20_backup_config"

    def run(self, ctx: InstallContext) -> StepOutcome:
        if ctx.options.skip_backup:
            return StepOutcome.skipped("backup disabled (--skip-backup)")

        backup_existing_config(ctx.paths, dry_run=ctx.options.dry_run)
        return StepOutcome.ok()
