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
# PACKAGER - COMMAND LINE
# -----------------------------------------------------------------------------
# Usage (from the project root):
#   packager            reset ./build, build every target, zip each one
#   packager status     compare packaged version.txt files with the servers
#
# Exit codes:
#   0    success
#   N    the failing toolchain's exit status
#   1    workspace / packaging failure
#   2    configuration error
#   124  build timeout
#   130  interrupted
# -----------------------------------------------------------------------------

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.core.config import load_config
from src.core.pipeline import Pipeline
from src.core.versions import check_versions
from src.domain.errors import PackagerError

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="packager",
        description="Build the release binaries and package each into a zip.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        choices=["build", "status"],
        help="build (default) or status",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Directory holding the sources (default: current directory)",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to packager.yaml"
    )
    return parser


def run_status(config, project_root: Path) -> int:
    """Print packaged vs published versions."""
    statuses = check_versions(
        project_root / config.output_dir,
        [t.name for t in config.targets],
        config.version_servers,
    )

    table = Table(title="Release versions")
    table.add_column("Target", style="bold")
    table.add_column("Packaged")
    table.add_column("Published")
    table.add_column("Status")

    for s in statuses:
        if s.update_available:
            verdict = "[yellow]update available[/yellow]"
        elif s.local is not None and s.remote is not None:
            verdict = "[green]up to date[/green]"
        else:
            verdict = f"[red]{s.error or 'unknown'}[/red]"
        table.add_row(s.target, str(s.local or "-"), str(s.remote or "-"), verdict)

    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    project_root = args.project_root.resolve()

    try:
        config = load_config(project_root, args.config)
        if args.command == "status":
            return run_status(config, project_root)
        Pipeline(config, project_root).run()
    except PackagerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
