"""Shared domain models for podman-wsl-setup."""

import enum
from dataclasses import dataclass
from typing import Optional

from podmanwsl.constants import CANARY_IMAGE, DEFAULT_SHELL_PROFILE


@dataclass(frozen=True)
class RunOptions:
    """Run configuration resolved once from CLI flags and config file."""

    skip_socket: bool = False
    skip_docker_shim: bool = False
    non_interactive: bool = False
    canary_image: str = CANARY_IMAGE
    shell_profile: str = DEFAULT_SHELL_PROFILE


@dataclass(frozen=True)
class UserIdentity:
    """The unprivileged account the host is being prepared for."""

    name: str
    uid: int
    home: str


class StepState(enum.Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class ShimStatus(enum.Enum):
    OK = "ok"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class VerificationResult:
    info_ok: bool
    rootless: Optional[str]
    canary_ok: bool
