"""Podman engine commands used by the setup steps."""

from typing import Optional

from podmanwsl.services.command_runner import CommandRunner


class PodmanRuntimeService:
    """Thin wrappers over the podman CLI and the docker-compatible shim."""

    def __init__(self, logger, runner: CommandRunner, executable: str = "podman"):
        self.logger = logger
        self.runner = runner
        self.executable = executable

    def stop_all(self) -> bool:
        result = self.runner.run([self.executable, "stop", "--all"], check=False, capture_output=True)
        return result.returncode == 0

    def system_migrate(self) -> bool:
        result = self.runner.run([self.executable, "system", "migrate"], check=False)
        return result.returncode == 0

    def info(self) -> bool:
        result = self.runner.run([self.executable, "info"], check=False, capture_output=True)
        return result.returncode == 0

    def info_field(self, template: str) -> Optional[str]:
        result = self.runner.run(
            [self.executable, "info", "--format", template],
            check=False,
            capture_output=True,
        )
        if result.returncode != 0:
            return None
        return (result.stdout or "").strip()

    def run_container(self, image: str) -> bool:
        result = self.runner.run([self.executable, "run", "--rm", image], check=False)
        return result.returncode == 0

    def cli_info(self, cli: str) -> bool:
        """Smoke-test another CLI (the docker shim) against this engine."""
        result = self.runner.run([cli, "info"], check=False, capture_output=True)
        return result.returncode == 0
