import logging

from click.testing import CliRunner

import podmanwsl.cli as cli_module


class ExplodingSetup:
    def __init__(self, **_kwargs):
        raise AssertionError("setup must not be constructed")


def _capturing_setup(captured, exit_code=0):
    class FakeSetup:
        def __init__(self, options):
            captured["options"] = options

        def run(self):
            return exit_code

    return FakeSetup


def test_help_prints_documentation_without_side_effects(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "PodmanSetup", ExplodingSetup)
    monkeypatch.chdir(tmp_path)

    runner = CliRunner()
    for flag in ("--help", "-h"):
        result = runner.invoke(cli_module.main, [flag])

        assert result.exit_code == 0
        assert "Configure rootless Podman in an existing WSL2 Ubuntu instance." in result.output
        assert "--skip-docker-shim" in result.output
        assert "systemd=true" in result.output

    assert list(tmp_path.iterdir()) == []


def test_unknown_flag_is_rejected(monkeypatch):
    monkeypatch.setattr(cli_module, "PodmanSetup", ExplodingSetup)

    result = CliRunner().invoke(cli_module.main, ["--bogus"])

    assert result.exit_code != 0
    assert "No such option" in result.output


def test_flags_build_run_options(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setattr(cli_module, "PodmanSetup", _capturing_setup(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, ["--non-interactive", "--skip-socket"])

    assert result.exit_code == 0
    options = captured["options"]
    assert options.non_interactive is True
    assert options.skip_socket is True
    assert options.skip_docker_shim is False
    assert options.canary_image == "quay.io/podman/hello"
    assert options.shell_profile == "~/.bashrc"


def test_setup_exit_code_is_propagated(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "PodmanSetup", _capturing_setup({}, exit_code=1))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, ["--non-interactive"])

    assert result.exit_code == 1


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    config_file = tmp_path / "custom.yml"
    config_file.write_text(
        "skip_docker_shim: true\n" "non_interactive: true\n" "canary_image: config/image\n",
        encoding="utf-8",
    )
    captured = {}
    monkeypatch.setattr(cli_module, "PodmanSetup", _capturing_setup(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(
        cli_module.main,
        ["--config", str(config_file), "--canary-image", "cli/image"],
    )

    assert result.exit_code == 0
    options = captured["options"]
    assert options.skip_docker_shim is True
    assert options.non_interactive is True
    assert options.canary_image == "cli/image"


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    (tmp_path / ".podman-wsl-setup.yml").write_text("skip_socket: true\n", encoding="utf-8")
    captured = {}
    monkeypatch.setattr(cli_module, "PodmanSetup", _capturing_setup(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0
    assert captured["options"].skip_socket is True


def test_invalid_config_is_reported(tmp_path, monkeypatch):
    config_file = tmp_path / "bad.yml"
    config_file.write_text("retry_count: 3\n", encoding="utf-8")
    monkeypatch.setattr(cli_module, "PodmanSetup", ExplodingSetup)

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file)])

    assert result.exit_code == 1
    assert "Unknown configuration keys: retry_count" in result.output


def test_log_file_is_created_only_when_something_is_logged(tmp_path, monkeypatch):
    log_file = tmp_path / "setup.log"
    package_logger = logging.getLogger("podmanwsl")
    handlers_before = list(package_logger.handlers)
    monkeypatch.setattr(cli_module, "PodmanSetup", _capturing_setup({}))
    monkeypatch.chdir(tmp_path)

    try:
        result = CliRunner().invoke(cli_module.main, ["--log-file", str(log_file)])

        assert result.exit_code == 0
        assert not log_file.exists()

        package_logger.info("first record")
        assert "first record" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in package_logger.handlers[len(handlers_before):]:
            package_logger.removeHandler(handler)
            handler.close()
