import logging
import os
import pwd
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from podmanwsl import constants
from podmanwsl.errors import SetupError
from podmanwsl.models import RunOptions, ShimStatus, StepState, UserIdentity, VerificationResult
from podmanwsl.services.command_runner import CommandRunner
from podmanwsl.services.dependencies import DependencyService
from podmanwsl.services.docker_shim import DockerShimService
from podmanwsl.services.docker_socket import DockerSocketService
from podmanwsl.services.filesystem import FileSystemService
from podmanwsl.services.host import HostService
from podmanwsl.services.identity import IdentityMapperService
from podmanwsl.services.migration import MigrationService
from podmanwsl.services.podman_runtime import PodmanRuntimeService
from podmanwsl.services.preflight import PreflightService
from podmanwsl.services.verification import VerificationService

console = Console()
logger = logging.getLogger("podmanwsl")

ConfirmFn = Callable[[str], bool]

SUMMARY = """
Quick checks:
  podman info --format '{{.Host.Security.Rootless}}'
  podman run --rm quay.io/podman/hello

If you enabled the socket step:
  source {profile}
  echo $DOCKER_HOST
  systemctl --user status podman.socket

If the socket step failed in WSL:
  - Make sure /etc/wsl.conf contains:
      [boot]
      systemd=true
  - Then run from Windows PowerShell:
      wsl --shutdown
  - Reopen Ubuntu and rerun this command.
"""


def _default_confirm(question: str) -> bool:
    return Confirm.ask(question, default=True, console=console)


def resolve_optional_step(
    skip: bool,
    non_interactive: bool,
    confirm: ConfirmFn,
    question: str,
) -> StepState:
    """Skip flag wins, non-interactive runs default to enabled, otherwise ask."""
    if skip:
        return StepState.DISABLED
    if non_interactive:
        return StepState.ENABLED
    return StepState.ENABLED if confirm(question) else StepState.DISABLED


class AdvisoryCollector(logging.Handler):
    """Records warning messages emitted while a run is in progress."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord):
        self.messages.append(record.getMessage())


class PodmanSetup:
    TOTAL_STEPS = 7

    def __init__(
        self,
        options: RunOptions,
        identity: Optional[UserIdentity] = None,
        confirm: Optional[ConfirmFn] = None,
        runner: Optional[CommandRunner] = None,
        host: Optional[HostService] = None,
        runtime: Optional[PodmanRuntimeService] = None,
        filesystem: Optional[FileSystemService] = None,
    ):
        self.options = options
        self.identity = identity
        self.confirm = confirm or _default_confirm

        self.command_runner = runner or CommandRunner(logger=logger)
        self.host = host or HostService(logger=logger, runner=self.command_runner)
        self.runtime = runtime or PodmanRuntimeService(logger=logger, runner=self.command_runner)
        self.filesystem = filesystem or FileSystemService(logger=logger)

        self.preflight_service = PreflightService(
            logger=logger,
            console=console,
            host=self.host,
            filesystem=self.filesystem,
        )
        self.dependency_service = DependencyService(logger=logger, console=console, host=self.host)
        self.identity_service = IdentityMapperService(
            logger=logger,
            console=console,
            host=self.host,
            filesystem=self.filesystem,
        )
        self.migration_service = MigrationService(logger=logger, console=console, runtime=self.runtime)
        self.verification_service = VerificationService(
            logger=logger,
            console=console,
            runtime=self.runtime,
        )
        self.docker_socket_service = DockerSocketService(
            logger=logger,
            console=console,
            host=self.host,
            filesystem=self.filesystem,
        )
        self.docker_shim_service = DockerShimService(
            logger=logger,
            console=console,
            host=self.host,
            runtime=self.runtime,
        )

    def resolve_identity(self) -> UserIdentity:
        uid = self.host.effective_uid()
        name = os.environ.get("USER")
        if not name:
            try:
                name = pwd.getpwuid(uid).pw_name
            except KeyError as exc:
                raise SetupError(
                    f"Could not determine the user name for uid {uid}. Set USER and try again."
                ) from exc
        return UserIdentity(name=name, uid=uid, home=os.path.expanduser("~"))

    def _print_step(self, number: int, name: str):
        console.print(f"\n[bold blue]==> Step {number}/{self.TOTAL_STEPS}: {name}[/bold blue]")
        logger.debug("Step %s/%s: %s", number, self.TOTAL_STEPS, name)

    def preflight(self, identity: UserIdentity):
        self.preflight_service.check_not_superuser(identity)
        self.preflight_service.check_required_commands()
        console.print(f"Running as user: {identity.name} (uid={identity.uid})")
        self.preflight_service.run_checks()

    def install_dependencies(self):
        packages = self.dependency_service.build_package_list()
        self.dependency_service.install(packages)

    def configure_identity_mappings(self, identity: UserIdentity) -> bool:
        changed = self.identity_service.ensure_mappings(identity)
        self.identity_service.show_mappings(identity)
        return changed

    def enable_docker_socket(self, identity: UserIdentity) -> StepState:
        state = resolve_optional_step(
            self.options.skip_socket,
            self.options.non_interactive,
            self.confirm,
            f"Enable rootless {constants.SOCKET_UNIT} and add DOCKER_HOST to {self.options.shell_profile}?",
        )
        if state is StepState.ENABLED:
            self.docker_socket_service.apply(identity, self.options.shell_profile)
        else:
            console.print("[dim]Skipping podman.socket and DOCKER_HOST.[/dim]")
        return state

    def install_docker_shim(self) -> Optional[ShimStatus]:
        """Return the shim self-check outcome, or None when the step is disabled."""
        state = resolve_optional_step(
            self.options.skip_docker_shim,
            self.options.non_interactive,
            self.confirm,
            f"Install {constants.SHIM_PACKAGE} so `{constants.SHIM_EXECUTABLE}` runs podman?",
        )
        if state is StepState.DISABLED:
            console.print(f"[dim]Skipping {constants.SHIM_PACKAGE}.[/dim]")
            return None
        return self.docker_shim_service.apply()

    def print_summary(
        self,
        advisories: List[str],
        verification: VerificationResult,
        shim_status: Optional[ShimStatus],
    ):
        console.print("\n[bold green]Done.[/bold green]")
        if verification.info_ok:
            canary = "passed" if verification.canary_ok else "failed"
            console.print(f"rootless={verification.rootless}, container test {canary}", markup=False)
        else:
            console.print("podman info failed; rootless status not verified", markup=False)
        if shim_status is not None:
            console.print(f"{constants.SHIM_EXECUTABLE} shim: {shim_status.value}", markup=False)
        if advisories:
            console.print(f"[yellow]Completed with {len(advisories)} warning(s):[/yellow]")
            for message in advisories:
                console.print(f"  - {message}", markup=False)
        console.print(SUMMARY.replace("{profile}", self.options.shell_profile), markup=False)

    def run(self) -> int:
        collector = AdvisoryCollector()
        logger.addHandler(collector)

        try:
            logger.info("Starting podman-wsl-setup...")
            identity = self.identity or self.resolve_identity()

            self._print_step(1, "Checking environment")
            self.preflight(identity)

            self._print_step(2, "Installing Podman and rootless dependencies")
            self.install_dependencies()

            self._print_step(3, f"Checking /etc/subuid and /etc/subgid entries for {identity.name}")
            mappings_changed = self.configure_identity_mappings(identity)

            self._print_step(4, "Storage migration")
            self.migration_service.migrate_if_needed(mappings_changed)

            self._print_step(5, "Verifying rootless Podman")
            verification = self.verification_service.verify(self.options.canary_image)

            self._print_step(6, "Docker-compatible socket")
            self.enable_docker_socket(identity)

            self._print_step(7, "Docker CLI compatibility shim")
            shim_status = self.install_docker_shim()

            self.print_summary(collector.messages, verification, shim_status)
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 130
        except SetupError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            return 1
        finally:
            logger.removeHandler(collector)
