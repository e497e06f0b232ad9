"""Domain errors for podman-wsl-setup."""


class SetupError(RuntimeError):
    """Raised when the host cannot be configured safely."""
