"""Actionable remediation catalog for podman-wsl-setup."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "superuser": {
        "what": "Do not run this script as root.",
        "next": "Run it as your normal WSL user; sudo is used only where needed.",
    },
    "command_missing": {
        "what": "Required command not found: {command}",
        "next": "Install it (or fix PATH) and try again.",
    },
    "not_wsl": {
        "what": "This does not look like WSL.",
        "next": "This tool is intended for WSL2 Ubuntu; continue only if you know the host is compatible.",
    },
    "systemd_not_running": {
        "what": "systemd may not be running (state: {state}).",
        "next": "Add `[boot]` / `systemd=true` to /etc/wsl.conf, run `wsl --shutdown` from Windows and reopen Ubuntu.",
    },
    "systemctl_missing": {
        "what": "systemctl not found. systemd is likely not active in this distro.",
        "next": "Enable systemd in /etc/wsl.conf and restart WSL.",
    },
    "cgroup_v1": {
        "what": "cgroup v1 detected. Rootless Podman works best with cgroup v2.",
        "next": "Use a WSL kernel with the unified cgroup hierarchy.",
    },
    "mount_not_shared": {
        "what": "Root filesystem mount propagation is '{state}', not 'shared'.",
        "next": "Run `sudo mount --make-rshared /` (add it to /etc/wsl.conf [boot] command to persist).",
    },
    "not_ubuntu": {
        "what": "Distribution '{distro}' is not Ubuntu.",
        "next": "Package names assume Ubuntu; install the equivalents manually if apt fails.",
    },
    "old_ubuntu": {
        "what": "Ubuntu {version} is older than {minimum}.",
        "next": "The '{package}' package may be missing; slirp4netns will be used for networking.",
    },
    "passt_unavailable": {
        "what": "The '{package}' package is not available.",
        "next": "slirp4netns will be used for rootless networking instead.",
    },
    "migrate_failed": {
        "what": "`podman system migrate` returned non-zero.",
        "next": "Log out of WSL and back in, then run `podman system migrate` again.",
    },
    "info_failed": {
        "what": "`podman info` failed; skipping rootless verification.",
        "next": "Run `podman info` manually to see the error.",
    },
    "not_rootless": {
        "what": "Podman did not report rootless=true (got: {value}).",
        "next": "Check systemd (WSL), /etc/subuid and /etc/subgid entries, and make sure you are not using sudo.",
    },
    "canary_failed": {
        "what": "Container test with {image} failed.",
        "next": "Podman is installed, but networking/storage may need attention.",
    },
    "socket_failed": {
        "what": "Failed to enable {unit}.",
        "next": "This is likely a systemd user-service issue in WSL; check `systemctl --user status {unit}`.",
    },
    "shim_missing": {
        "what": "`{executable}` was not found on PATH after installing {package}.",
        "next": "Restart your shell and run `{executable} info`.",
    },
    "shim_failed": {
        "what": "`{executable} info` failed.",
        "next": "The Docker-compatible socket may be required; rerun without --skip-socket.",
    },
}


def remediation(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
