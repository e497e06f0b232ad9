"""Fixed names, paths and ranges used across the setup steps."""

BASE_PACKAGES = (
    "podman",
    "uidmap",
    "dbus-user-session",
    "fuse-overlayfs",
    "slirp4netns",
)
MODERN_NETWORK_PACKAGE = "passt"
PASST_MIN_UBUNTU = "23.04"

REQUIRED_COMMANDS = ("sudo", "apt-get", "apt-cache", "dpkg-query")

SUBID_START = 100000
SUBID_COUNT = 65536
SUBUID_FILE = "/etc/subuid"
SUBGID_FILE = "/etc/subgid"

PROC_VERSION_FILE = "/proc/version"
CGROUP_V2_MARKER = "/sys/fs/cgroup/cgroup.controllers"
OS_RELEASE_FILE = "/etc/os-release"
WSL_MARKER = "microsoft"
ACCEPTED_SYSTEMD_STATES = ("running", "degraded")

CANARY_IMAGE = "quay.io/podman/hello"
ROOTLESS_FORMAT = "{{.Host.Security.Rootless}}"

SOCKET_UNIT = "podman.socket"
DOCKER_HOST_VAR = "DOCKER_HOST"
# $(id -u) stays literal so every future shell expands it.
DOCKER_HOST_PROFILE_LINE = "export DOCKER_HOST=unix:///run/user/$(id -u)/podman/podman.sock"
DOCKER_HOST_PROFILE_COMMENT = "# Podman rootless socket (Docker-compatible)"
DOCKER_HOST_TEMPLATE = "unix:///run/user/{uid}/podman/podman.sock"
DEFAULT_SHELL_PROFILE = "~/.bashrc"

SHIM_PACKAGE = "podman-docker"
SHIM_EXECUTABLE = "docker"
