import pytest

from podmanwsl.errors import SetupError
from podmanwsl.models import UserIdentity
from podmanwsl.services.filesystem import FileSystemService
from podmanwsl.services.preflight import PreflightService


class DummyLogger:
    def __init__(self):
        self.warnings = []

    def debug(self, *_args, **_kwargs):
        return None

    def warning(self, message, *_args, **_kwargs):
        self.warnings.append(message)


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


class FakeHost:
    def __init__(self, systemd_state="running", propagation="shared", missing=()):
        self._systemd_state = systemd_state
        self._propagation = propagation
        self.missing = set(missing)

    def which(self, command):
        return None if command in self.missing else f"/usr/bin/{command}"

    def systemd_state(self):
        return self._systemd_state

    def root_propagation(self):
        return self._propagation


@pytest.fixture
def wsl_files(tmp_path):
    proc_version = tmp_path / "version"
    proc_version.write_text(
        "Linux version 5.15.153.1-microsoft-standard-WSL2 (root@1234) #1 SMP\n",
        encoding="utf-8",
    )
    cgroup_marker = tmp_path / "cgroup.controllers"
    cgroup_marker.write_text("cpu memory pids\n", encoding="utf-8")
    os_release = tmp_path / "os-release"
    os_release.write_text('NAME="Ubuntu"\nID=ubuntu\nVERSION_ID="24.04"\n', encoding="utf-8")
    return {
        "proc_version_file": str(proc_version),
        "cgroup_marker": str(cgroup_marker),
        "os_release_file": str(os_release),
    }


def _service(host, files, logger=None):
    logger = logger or DummyLogger()
    return PreflightService(
        logger=logger,
        console=DummyConsole(),
        host=host,
        filesystem=FileSystemService(logger=logger),
        **files,
    )


def test_superuser_is_fatal(wsl_files):
    service = _service(FakeHost(), wsl_files)

    with pytest.raises(SetupError, match="Do not run this script as root"):
        service.check_not_superuser(UserIdentity(name="root", uid=0, home="/root"))

    service.check_not_superuser(UserIdentity(name="alice", uid=1000, home="/home/alice"))


def test_missing_required_command_is_fatal(wsl_files):
    service = _service(FakeHost(missing={"apt-get"}), wsl_files)

    with pytest.raises(SetupError, match="Required command not found: apt-get"):
        service.check_required_commands()


def test_healthy_wsl_host_has_no_advisories(wsl_files):
    logger = DummyLogger()
    service = _service(FakeHost(), wsl_files, logger=logger)

    assert service.run_checks() == []
    assert logger.warnings == []


def test_every_mismatch_is_advisory(tmp_path, wsl_files):
    (tmp_path / "version").write_text("Linux version 6.8.0-generic\n", encoding="utf-8")
    (tmp_path / "cgroup.controllers").unlink()
    (tmp_path / "os-release").write_text("ID=ubuntu\nVERSION_ID=22.04\n", encoding="utf-8")
    logger = DummyLogger()
    service = _service(FakeHost(systemd_state="offline", propagation="private"), wsl_files, logger)

    advisories = service.run_checks()

    assert len(advisories) == 5
    assert advisories == logger.warnings
    assert "does not look like WSL" in advisories[0]
    assert "state: offline" in advisories[1]
    assert "cgroup v1" in advisories[2]
    assert "'private'" in advisories[3]
    assert "Ubuntu 22.04 is older than 23.04" in advisories[4]


def test_systemd_degraded_is_accepted_and_missing_systemctl_warns(wsl_files):
    assert _service(FakeHost(systemd_state="degraded"), wsl_files).check_systemd() is None
    assert "systemctl not found" in _service(FakeHost(systemd_state=None), wsl_files).check_systemd()
    assert "state: unknown" in _service(FakeHost(systemd_state=""), wsl_files).check_systemd()


def test_unknown_propagation_warns(wsl_files):
    message = _service(FakeHost(propagation=None), wsl_files).check_mount_propagation()

    assert "'unknown'" in message


def test_distribution_checks(tmp_path, wsl_files):
    os_release = tmp_path / "os-release"
    service = _service(FakeHost(), wsl_files)

    os_release.write_text("ID=debian\nVERSION_ID=12\n", encoding="utf-8")
    assert "'debian' is not Ubuntu" in service.check_distribution()

    os_release.write_text("ID=ubuntu\nVERSION_ID=noble\n", encoding="utf-8")
    assert service.check_distribution() is None

    os_release.unlink()
    assert service.check_distribution() is None
