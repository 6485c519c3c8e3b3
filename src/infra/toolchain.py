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
# TOOLCHAIN INFRASTRUCTURE - Local Compiler
# -----------------------------------------------------------------------------
# Responsibility: Run the release build command for one target on the host.
# Uses subprocess directly; the compiler's own output goes straight to the
# operator's terminal so its diagnostics are visible as they happen.
#
# Default command: cargo build --release --bin <target>
# -----------------------------------------------------------------------------

import subprocess
from pathlib import Path

from rich.console import Console

from src.domain.errors import EXIT_NOT_FOUND, BuildError, BuildTimeoutError

console = Console()


class Toolchain:
    """Runs `<command...> <target>` in the project root."""

    def __init__(self, project_root: Path, command: list[str], timeout: int) -> None:
        """
        Args:
            project_root: Working directory for the compiler.
            command: Command prefix; the target name is appended.
            timeout: Seconds before the build is killed.
        """
        self._root = Path(project_root)
        self._command = list(command)
        self._timeout = timeout

    def command_for(self, target: str) -> list[str]:
        return [*self._command, target]

    def build(self, target: str) -> None:
        """
        Build one target.

        Raises:
            BuildError: Non-zero exit, or the toolchain executable is missing.
            BuildTimeoutError: The build ran longer than the timeout.
        """
        cmd = self.command_for(target)
        console.print(f"[cyan][BUILD] $ {' '.join(cmd)}[/cyan]")

        try:
            result = subprocess.run(cmd, cwd=self._root, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            console.print(f"[red][BUILD] {target}: timed out after {self._timeout}s[/red]")
            raise BuildTimeoutError(
                f"Build of '{target}' timed out ({self._timeout}s limit)", target=target
            )
        except FileNotFoundError:
            raise BuildError(
                f"Toolchain not found: {cmd[0]}", target=target, exit_code=EXIT_NOT_FOUND
            )
        except OSError as e:
            raise BuildError(f"Could not start toolchain: {e}", target=target)

        if result.returncode != 0:
            console.print(f"[red][BUILD] {target}: toolchain exited {result.returncode}[/red]")
            raise BuildError(
                f"Build of '{target}' failed (exit {result.returncode})",
                target=target,
                exit_code=result.returncode,
            )
