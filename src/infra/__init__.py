# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level wrappers around external build tools:
# - Toolchain: host compiler via subprocess
# - DockerProvider / ContainerToolchain: the same build inside a container
# -----------------------------------------------------------------------------

from .toolchain import Toolchain

__all__ = ["Toolchain"]
