"""podman-docker compatibility shim installation and self-check."""

from podmanwsl import constants
from podmanwsl.errors_catalog import remediation
from podmanwsl.models import ShimStatus
from podmanwsl.services.host import HostService
from podmanwsl.services.podman_runtime import PodmanRuntimeService


class DockerShimService:
    def __init__(self, logger, console, host: HostService, runtime: PodmanRuntimeService):
        self.logger = logger
        self.console = console
        self.host = host
        self.runtime = runtime

    def install(self) -> bool:
        """Install the shim package unless dpkg already reports it; True if installed now."""
        package = constants.SHIM_PACKAGE
        if self.host.package_installed(package):
            self.console.print(f"[dim]{package} is already installed.[/dim]")
            return False

        self.console.print(f"[blue]Installing {package}...[/blue]")
        self.host.install_packages([package])
        return True

    def self_check(self) -> ShimStatus:
        executable = constants.SHIM_EXECUTABLE
        if not self.host.which(executable):
            self.logger.warning(
                remediation("shim_missing", executable=executable, package=constants.SHIM_PACKAGE)
            )
            return ShimStatus.MISSING

        if not self.runtime.cli_info(executable):
            self.logger.warning(remediation("shim_failed", executable=executable))
            return ShimStatus.FAILED

        self.console.print(f"[green]`{executable}` delegates to podman successfully.[/green]")
        return ShimStatus.OK

    def apply(self) -> ShimStatus:
        self.install()
        return self.self_check()
