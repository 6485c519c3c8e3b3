# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the release target models (Pydantic) that define the contract
# between the Builder and the Packager, plus the shared error taxonomy.
# -----------------------------------------------------------------------------

from .errors import (
    BuildError,
    BuildTimeoutError,
    ConfigError,
    MissingArtifactError,
    PackagerError,
    PackagingError,
    PipelineInterrupted,
    WorkspaceError,
)
from .models import (
    BuilderKind,
    BuildResult,
    PackageResult,
    PipelineState,
    RunReport,
    TargetSpec,
    default_targets,
)

__all__ = [
    "BuilderKind", "BuildResult", "PackageResult", "PipelineState", "RunReport",
    "TargetSpec", "default_targets",
    "PackagerError", "WorkspaceError", "BuildError", "BuildTimeoutError",
    "MissingArtifactError", "PackagingError", "ConfigError", "PipelineInterrupted",
]
