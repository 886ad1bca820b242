from __future__ import annotations

from ..lib.tpm import ensure_tpm
from ..pipeline import InstallContext, StepOutcome


class InstallPluginManagerStep:
    step_id = "30_install_plugin_manager"

    def run(self, ctx: InstallContext) -> StepOutcome:
        action = ensure_tpm(ctx.paths, ctx.run, dry_run=ctx.options.dry_run)
        return StepOutcome.ok(f"TPM {action} at {ctx.paths.tpm_dir}")
