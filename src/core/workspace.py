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
# WORKSPACE RESET
# -----------------------------------------------------------------------------
# Responsibility: Give every run an empty output directory. Whatever was in
# it before (previous packages, stray files) is destroyed.
# -----------------------------------------------------------------------------

import shutil
from pathlib import Path

from rich.console import Console

from src.domain.errors import WorkspaceError

console = Console()


def reset_workspace(output_dir: Path) -> Path:
    """
    Remove the output directory (if present) and recreate it empty.

    Args:
        output_dir: Directory to reset. Parents are created as needed.

    Returns:
        The (now empty) output directory.

    Raises:
        WorkspaceError: If removal or creation fails (permissions, disk full).
    """
    output_dir = Path(output_dir)
    console.print(f"[cyan][WORKSPACE] Resetting {output_dir}[/cyan]")

    try:
        if output_dir.is_symlink() or output_dir.is_file():
            output_dir.unlink()
        elif output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as e:
        console.print(f"[red][WORKSPACE] Reset failed: {e}[/red]")
        raise WorkspaceError(f"Could not reset {output_dir}: {e}")

    return output_dir
