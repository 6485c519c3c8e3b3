# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of the release packager:
# - Config: packager.yaml + PACKAGER_* environment
# - Workspace: destructive reset of the output directory
# - Builder: release compilation + binary verification
# - Packager: per-target staging and zip archives
# - Pipeline: ordered stages, fail-fast
# - FlightRecorder: run evidence
# - Versions: packaged vs published version markers
# -----------------------------------------------------------------------------

from .builder import Builder, make_toolchain
from .config import PackagerConfig, load_config
from .packager import Packager
from .pipeline import Pipeline, Stage
from .recorder import FlightRecorder
from .versions import Version, VersionError, check_versions
from .workspace import reset_workspace

__all__ = [
    "Builder", "make_toolchain",
    "PackagerConfig", "load_config",
    "Packager",
    "Pipeline", "Stage",
    "FlightRecorder",
    "Version", "VersionError", "check_versions",
    "reset_workspace",
]
