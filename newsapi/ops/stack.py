"""Container lifecycle for the news API stack.

Wraps the Docker SDK (image build, resource cleanup) and the compose / psql
command line tools behind one object so the CLI and the Makefile share a
single implementation.

Usage:
    from newsapi.ops.stack import StackManager

    stack = StackManager()
    stack.build()
    stack.run()
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Sequence

import docker
from docker.errors import APIError, DockerException, NotFound

from newsapi.core.config import Settings, settings as default_settings
from newsapi.core.logging import get_logger

if TYPE_CHECKING:
    from docker import DockerClient


logger = get_logger("ops.stack")

Runner = Callable[..., subprocess.CompletedProcess]


class OpsError(Exception):
    """A container operation could not be carried out."""

    exit_code: int = 1


class CommandError(OpsError):
    """A wrapped command line tool exited non-zero."""

    def __init__(self, command: Sequence[str], returncode: int):
        self.command = list(command)
        self.returncode = returncode
        self.exit_code = returncode
        super().__init__(
            f"Command failed with exit code {returncode}: {shlex.join(self.command)}"
        )


@dataclass
class CleanReport:
    """What ``StackManager.clean`` removed and what it had to skip."""

    image_removed: bool = False
    containers: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    volumes: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return (
            int(self.image_removed)
            + len(self.containers)
            + len(self.images)
            + len(self.volumes)
        )


class StackManager:
    """Build, run, inspect and tear down the compose stack."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: "DockerClient | None" = None,
        runner: Runner = subprocess.run,
    ):
        self.settings = settings or default_settings
        self._client = client
        self._runner = runner

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @property
    def client(self) -> "DockerClient":
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as e:
                raise OpsError(f"Cannot connect to Docker daemon: {e}") from e
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _compose(self, *args: str) -> list[str]:
        return [
            *shlex.split(self.settings.compose_command),
            "-f",
            self.settings.compose_file,
            *args,
        ]

    def _psql(self, *extra: str, interactive: bool = True) -> list[str]:
        cmd = ["docker", "exec"]
        if interactive:
            cmd.append("-it")
        cmd += [
            self.settings.db_container_name,
            "psql",
            "-U",
            self.settings.db_user,
            "-d",
            self.settings.db_name,
        ]
        return cmd + list(extra)

    def _exec(self, command: list[str]) -> int:
        logger.debug(f"Running: {shlex.join(command)}")
        try:
            result = self._runner(command, check=False)
        except FileNotFoundError as e:
            raise OpsError(f"Executable not found: {command[0]}") from e
        if result.returncode != 0:
            raise CommandError(command, result.returncode)
        return result.returncode

    # ------------------------------------------------------------------
    # targets
    # ------------------------------------------------------------------

    def build(self) -> str:
        """Build and tag the service image. Returns the image id."""
        tag = self.settings.image_reference
        logger.info("Building Docker images...")
        logger.info(f"Building {tag} from {self.settings.build_context}")

        image_id = ""
        try:
            for chunk in self.client.api.build(
                path=self.settings.build_context,
                tag=tag,
                buildargs={"DATABASE_URL": self.settings.database_url},
                rm=True,
                decode=True,
            ):
                if "error" in chunk:
                    raise OpsError(f"Image build failed: {chunk['error'].strip()}")
                line = chunk.get("stream", "").rstrip()
                if line:
                    logger.info(line)
                aux = chunk.get("aux")
                if isinstance(aux, dict) and aux.get("ID"):
                    image_id = aux["ID"]
        except APIError as e:
            raise OpsError(f"Image build failed: {e.explanation or e}") from e

        logger.info(f"Built {tag} {image_id}".rstrip())
        return image_id

    def run(self) -> int:
        logger.info("Starting services with Docker Compose...")
        return self._exec(self._compose("up", "-d"))

    def stop(self) -> int:
        logger.info("Stopping services...")
        return self._exec(self._compose("down"))

    def logs(self, follow: bool = True) -> int:
        logger.info("Displaying logs...")
        args = ["logs", "-f"] if follow else ["logs"]
        return self._exec(self._compose(*args))

    def db_shell(self) -> int:
        logger.info("Connecting to the database shell...")
        return self._exec(self._psql())

    def db_view_tables(self) -> int:
        logger.info("Viewing tables in the database...")
        return self._exec(self._psql("-c", r"\dt", interactive=False))

    def all(self) -> int:
        self.build()
        return self.run()

    def clean(self) -> CleanReport:
        """Stop the stack, then remove images, containers and volumes.

        Stopping must succeed. Every removal after that is best-effort:
        missing or busy resources are logged and skipped.
        """
        self.stop()
        logger.info("Removing Docker images and volumes...")
        report = CleanReport()

        report.image_removed = self._remove_tagged_image(report)
        report.containers = self._remove_each(
            "container", self.client.containers.list(all=True), report
        )
        if not report.containers:
            logger.info("No containers to remove")
        report.images = self._remove_each(
            "image",
            self.client.images.list(),
            report,
            remove=lambda image: self.client.images.remove(image.id),
        )
        if not report.images:
            logger.info("No images to remove")
        report.volumes = self._remove_each("volume", self.client.volumes.list(), report)
        if not report.volumes:
            logger.info("No volumes to remove")

        logger.info(
            f"Clean finished: {report.removed_count} removed, {len(report.skipped)} skipped"
        )
        return report

    def _remove_tagged_image(self, report: CleanReport) -> bool:
        tag = self.settings.image_reference
        try:
            self.client.images.remove(tag)
        except NotFound:
            logger.info("No such image")
            return False
        except APIError as e:
            logger.warning(f"Could not remove {tag}: {e.explanation or e}")
            report.skipped.append(tag)
            return False
        logger.info(f"Removed image {tag}")
        return True

    def _remove_each(
        self,
        kind: str,
        resources: list[Any],
        report: CleanReport,
        remove: Callable[[Any], None] | None = None,
    ) -> list[str]:
        removed = []
        for resource in resources:
            ident = _identify(resource)
            try:
                if remove is not None:
                    remove(resource)
                else:
                    resource.remove()
            except NotFound:
                # Already gone, e.g. an image untagged by an earlier removal
                continue
            except APIError as e:
                logger.warning(f"Could not remove {kind} {ident}: {e.explanation or e}")
                report.skipped.append(ident)
                continue
            logger.info(f"Removed {kind} {ident}")
            removed.append(ident)
        return removed


def _identify(resource: Any) -> str:
    name = getattr(resource, "name", None)
    if isinstance(name, str) and name:
        return name
    return getattr(resource, "short_id", None) or str(getattr(resource, "id", resource))
