from .step_10_prepare_dirs import PrepareDirsStep
from .step_20_download import DownloadStep
from .step_30_verify import VerifyStep
from .step_40_mount import MountStep
from .step_50_build_package import BuildPackageStep
from .step_60_update_catalog import UpdateCatalogStep
from .step_70_detach import DetachStep
from .step_90_cleanup import CleanupStep

__all__ = [
    "PrepareDirsStep",
    "DownloadStep",
    "VerifyStep",
    "MountStep",
    "BuildPackageStep",
    "UpdateCatalogStep",
    "DetachStep",
    "CleanupStep",
]
