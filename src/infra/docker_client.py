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
# DOCKER PROVIDER - Containerised Toolchain
# -----------------------------------------------------------------------------
# Responsibility: Run the release build inside a toolchain image instead of
# on the host (builder: docker). The project root is bind-mounted at
# /workspace, so binaries land in the host's target/ directory and the rest
# of the pipeline does not care where they were compiled.
# -----------------------------------------------------------------------------

import os
from pathlib import Path

import docker
import requests
from docker import DockerClient
from docker.errors import DockerException, ImageNotFound
from rich.console import Console
from rich.panel import Panel

from src.domain.errors import BuildError, BuildTimeoutError

console = Console()

CONTAINER_WORKDIR = "/workspace"


def _is_wait_timeout(error: requests.exceptions.RequestException) -> bool:
    """
    True when container.wait() gave up because the build outlived the timeout.

    Depending on the urllib3 version the read timeout surfaces either as
    ReadTimeout or as a ConnectionError wrapping ReadTimeoutError.
    """
    if isinstance(error, requests.exceptions.ReadTimeout):
        return True
    if isinstance(error, requests.exceptions.ConnectionError):
        return "timed out" in str(error).lower()
    return False


class DockerProviderError(BuildError):
    """Raised when the Docker engine is unreachable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, target="*")


class DockerProvider:
    """
    Docker SDK connection holder.

    Connects to DOCKER_HOST when set, else the local engine, and fails fast
    with a readable panel when neither answers.
    """

    def __init__(self) -> None:
        self._client: DockerClient | None = None
        self._connect()

    def _connect(self) -> None:
        docker_host = os.getenv("DOCKER_HOST")
        try:
            if docker_host:
                self._client = docker.DockerClient(base_url=docker_host)
            else:
                self._client = docker.from_env()
            self._client.ping()
            console.print("[green][DOCKER] Connected to Docker Engine[/green]")
        except DockerException as e:
            self._client = None
            console.print(
                Panel(
                    "[bold red]Docker Engine Unavailable[/bold red]\n\n"
                    "1. Start Docker (or set DOCKER_HOST)\n"
                    "2. Or build on the host with PACKAGER_BUILDER=local",
                    title="BUILD HALTED",
                    border_style="red",
                )
            )
            raise DockerProviderError(f"Docker Engine is not available: {e}")

    def get_client(self) -> DockerClient:
        if self._client is None:
            raise DockerProviderError("Docker client not initialized")
        return self._client

    def ensure_image(self, image: str) -> None:
        """Pull image if not present."""
        client = self.get_client()
        try:
            client.images.get(image)
            console.print(f"[cyan][DOCKER] Image ready: {image}[/cyan]")
        except ImageNotFound:
            console.print(f"[yellow][DOCKER] Pulling: {image}...[/yellow]")
            client.images.pull(image)
            console.print(f"[green][DOCKER] Pulled: {image}[/green]")


class ContainerToolchain:
    """Same contract as infra.toolchain.Toolchain, executed in a container."""

    def __init__(
        self,
        project_root: Path,
        command: list[str],
        timeout: int,
        image: str,
        provider: DockerProvider | None = None,
    ) -> None:
        self._root = Path(project_root).resolve()
        self._command = list(command)
        self._timeout = timeout
        self._image = image
        self._provider = provider or DockerProvider()
        self._image_checked = False

    def command_for(self, target: str) -> list[str]:
        return [*self._command, target]

    def build(self, target: str) -> None:
        """
        Build one target in a throwaway container.

        Raises:
            BuildError: Non-zero container exit or Docker API failure.
            BuildTimeoutError: The container ran longer than the timeout.
        """
        client = self._provider.get_client()
        if not self._image_checked:
            try:
                self._provider.ensure_image(self._image)
            except DockerException as e:
                raise BuildError(f"Could not pull {self._image}: {e}", target=target)
            self._image_checked = True

        cmd = self.command_for(target)
        console.print(f"[cyan][BUILD] ({self._image}) $ {' '.join(cmd)}[/cyan]")

        try:
            container = client.containers.run(
                self._image,
                command=cmd,
                detach=True,
                working_dir=CONTAINER_WORKDIR,
                volumes={str(self._root): {"bind": CONTAINER_WORKDIR, "mode": "rw"}},
            )
        except DockerException as e:
            raise BuildError(f"Could not start build container for '{target}': {e}", target=target)

        try:
            try:
                status = container.wait(timeout=self._timeout)
            except requests.exceptions.RequestException as e:
                if not _is_wait_timeout(e):
                    console.print(f"[red][DOCKER] Lost contact with {target} build: {e}[/red]")
                    raise BuildError(f"Docker error while building '{target}': {e}", target=target)
                console.print(f"[red][BUILD] {target}: timed out after {self._timeout}s[/red]")
                container.kill()
                raise BuildTimeoutError(
                    f"Build of '{target}' timed out ({self._timeout}s limit)", target=target
                )
            except DockerException as e:
                raise BuildError(f"Docker error while building '{target}': {e}", target=target)

            logs = container.logs()
            if logs:
                console.print(logs.decode("utf-8", errors="replace"), end="", markup=False)

            exit_code = status.get("StatusCode", 1)
            if exit_code != 0:
                console.print(f"[red][BUILD] {target}: container exited {exit_code}[/red]")
                raise BuildError(
                    f"Build of '{target}' failed (exit {exit_code})",
                    target=target,
                    exit_code=exit_code,
                )
        finally:
            try:
                container.remove(force=True)
            except DockerException as e:
                console.print(f"[yellow][DOCKER] Could not remove container: {e}[/yellow]")
