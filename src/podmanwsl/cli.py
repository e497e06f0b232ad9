import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler

from .constants import CANARY_IMAGE, DEFAULT_SHELL_PROFILE
from .core import PodmanSetup, SetupError
from .models import RunOptions
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
    ],
)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--skip-socket",
    is_flag=True,
    default=None,
    help="Skip enabling podman.socket and adding DOCKER_HOST to the shell profile.",
)
@click.option(
    "--skip-docker-shim",
    is_flag=True,
    default=None,
    help="Skip installing podman-docker (the `docker` compatibility command).",
)
@click.option(
    "--non-interactive",
    is_flag=True,
    default=None,
    help="Do not prompt; optional steps are enabled unless skipped explicitly.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .podman-wsl-setup.yml if present.",
)
@click.option(
    "--canary-image",
    required=False,
    help=f"Image used for the container test (default: {CANARY_IMAGE}).",
)
@click.option(
    "--shell-profile",
    required=False,
    type=click.Path(),
    help=f"Shell profile that receives the DOCKER_HOST export (default: {DEFAULT_SHELL_PROFILE}).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(
    skip_socket,
    skip_docker_shim,
    non_interactive,
    config,
    canary_image,
    shell_profile,
    verbose,
    log_file,
):
    """Configure rootless Podman in an existing WSL2 Ubuntu instance.

    \b
    What this command does:
      1) Checks the environment (WSL, systemd, cgroups, mount propagation)
      2) Installs Podman and rootless dependencies
      3) Ensures /etc/subuid and /etc/subgid mappings exist for the current user
      4) Runs `podman system migrate` if the mappings were changed
      5) Verifies rootless Podman with a container test
      6) Optionally enables the Docker-compatible podman.socket and
         appends DOCKER_HOST to ~/.bashrc
      7) Optionally installs podman-docker so `docker` runs Podman

    \b
    Rootless Podman requires systemd in WSL. Verify with:
      systemctl is-system-running
    If it prints "running" or "degraded" you are set. Otherwise add
      [boot]
      systemd=true
    to /etc/wsl.conf, run `wsl --shutdown` from Windows PowerShell,
    reopen Ubuntu and run this command again.

    Run as your normal WSL user, not with sudo. sudo is used only for
    package installation and the subordinate id mappings. Ubuntu releases
    older than 23.04 lack the passt package; slirp4netns is used instead.
    """
    logger = logging.getLogger("podmanwsl")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), ConfigLoader.DEFAULT_FILENAME)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except SetupError as exc:
        raise click.ClickException(str(exc)) from exc

    skip_socket = bool(_resolve_option(skip_socket, config_values, "skip_socket", default=False))
    skip_docker_shim = bool(
        _resolve_option(skip_docker_shim, config_values, "skip_docker_shim", default=False)
    )
    non_interactive = bool(
        _resolve_option(non_interactive, config_values, "non_interactive", default=False)
    )
    canary_image = str(
        _resolve_option(canary_image, config_values, "canary_image", default=CANARY_IMAGE)
    )
    shell_profile = str(
        _resolve_option(shell_profile, config_values, "shell_profile", default=DEFAULT_SHELL_PROFILE)
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file, delay=True)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    options = RunOptions(
        skip_socket=skip_socket,
        skip_docker_shim=skip_docker_shim,
        non_interactive=non_interactive,
        canary_image=canary_image,
        shell_profile=shell_profile,
    )

    setup = PodmanSetup(options=options)
    raise SystemExit(setup.run())


if __name__ == "__main__":
    main()
