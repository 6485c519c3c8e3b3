# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# ERROR TAXONOMY
# -----------------------------------------------------------------------------
# Every failure the packager can hit is a PackagerError carrying the exit
# code the process should end with. The CLI catches PackagerError once and
# exits with that code; nothing below it recovers or retries.
#
#   WorkspaceError        reset/create of the output directory failed
#   BuildError            toolchain reported failure for a target
#   BuildTimeoutError     toolchain exceeded the build timeout
#   MissingArtifactError  expected binary or version marker is absent
#   PackagingError        copy or archive step failed
#   ConfigError           packager.yaml / environment is invalid
# -----------------------------------------------------------------------------

EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


class PackagerError(Exception):
    """Base class for pipeline failures."""

    exit_code = EXIT_FAILURE

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class WorkspaceError(PackagerError):
    """Raised when the output directory cannot be reset."""

    pass


class BuildError(PackagerError):
    """Raised when the toolchain exits non-zero for a target."""

    def __init__(self, message: str, target: str, exit_code: int = EXIT_FAILURE) -> None:
        # A signal-killed child reports a negative status; never exit 0 on failure.
        super().__init__(message, exit_code=exit_code if exit_code > 0 else EXIT_FAILURE)
        self.target = target


class BuildTimeoutError(BuildError):
    """Raised when a build exceeds the configured timeout."""

    def __init__(self, message: str, target: str) -> None:
        super().__init__(message, target=target, exit_code=EXIT_TIMEOUT)


class MissingArtifactError(PackagerError):
    """Raised when a binary or version marker is not where it should be."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class PackagingError(PackagerError):
    """Raised when copying into the package dir or archiving fails."""

    pass


class ConfigError(PackagerError):
    """Raised when configuration cannot be loaded or validated."""

    exit_code = EXIT_CONFIG


class PipelineInterrupted(PackagerError):
    """Raised when the operator interrupts a run (Ctrl+C)."""

    exit_code = EXIT_INTERRUPTED
