"""Package-set construction and installation."""

from typing import List

from podmanwsl import constants
from podmanwsl.errors_catalog import remediation
from podmanwsl.services.host import HostService


class DependencyService:
    """Builds the package list and hands it to apt-get."""

    def __init__(self, logger, console, host: HostService):
        self.logger = logger
        self.console = console
        self.host = host

    def build_package_list(self) -> List[str]:
        packages = list(constants.BASE_PACKAGES)
        package = constants.MODERN_NETWORK_PACKAGE
        if self.host.package_available(package):
            packages.append(package)
            self.console.print(
                f"[green]{package} package found; will install (modern rootless networking).[/green]"
            )
        else:
            self.logger.warning(remediation("passt_unavailable", package=package))
        return packages

    def install(self, packages: List[str]):
        self.console.print(f"[blue]Installing: {' '.join(packages)}[/blue]")
        self.logger.info("Installing packages: %s", ", ".join(packages))
        self.host.update_package_index()
        self.host.install_packages(packages)
        self.console.print("[green]Packages installed.[/green]")
