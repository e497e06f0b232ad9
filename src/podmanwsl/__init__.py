"""
podman-wsl-setup - Rootless Podman configuration for WSL2 Ubuntu
"""

__version__ = "0.1.0"

from .core import PodmanSetup, SetupError

__all__ = ["PodmanSetup", "SetupError"]
