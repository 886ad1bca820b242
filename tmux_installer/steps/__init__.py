from .step_10_install_deps import InstallDependenciesStep
from .step_20_backup_config import BackupConfigStep
from .step_30_install_tpm import InstallPluginManagerStep
from .step_40_install_config import InstallConfigStep
from .step_50_install_plugins import InstallPluginsStep

__all__ = [
    "InstallDependenciesStep",
    "BackupConfigStep",
    "InstallPluginManagerStep",
    "InstallConfigStep",
    "InstallPluginsStep",
]
