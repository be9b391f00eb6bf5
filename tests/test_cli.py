"""
Tests for ftchelper.cli module.

Runs the CLI entry point end-to-end with network and process collaborators
mocked, checking exit codes and printed output.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import make_project
from ftchelper.cli import build_parser, main
from ftchelper.exceptions import CommandError, ConfigError
from ftchelper.project.releases import FTC_RELEASES_API
from ftchelper.results import ToolVersions


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point the home directory at an empty temp dir and clear overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for var in ("FTC_HELPER_WORK_DIR", "FTC_HELPER_ANDROID_STUDIO_PATH", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return home


def run_cli(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_download_commands_registered(self):
        parser = build_parser()
        for command in ("download-studio", "download-git", "download-rev", "download-bambu"):
            args = parser.parse_args([command, "-o", "out", "--platform", "mac", "-v"])
            assert args.out == "out"
            assert args.platform == "mac"
            assert args.verbose

    def test_init_options(self):
        args = build_parser().parse_args(["init", "v10.1", "-p", "robot", "-g", "gh/x"])
        assert (args.version, args.project, args.git) == ("v10.1", "robot", "gh/x")

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """Tests for command handlers through main()."""

    def test_projects(self, work_dir, capsys):
        make_project(work_dir, "beta")
        make_project(work_dir, "alpha")

        assert run_cli("-w", str(work_dir), "projects") == 0

        out = capsys.readouterr().out
        assert f"Active projects in: {work_dir}" in out
        assert out.index("- alpha") < out.index("- beta")

    def test_projects_empty(self, work_dir, capsys):
        assert run_cli("-w", str(work_dir), "projects") == 0
        assert "No active projects found." in capsys.readouterr().out

    def test_projects_missing_work_dir(self, tmp_path, capsys):
        assert run_cli("-w", str(tmp_path / "nope"), "projects") == 1
        assert "Error:" in capsys.readouterr().out

    def test_config_uses_default_file(self, isolated_env, capsys):
        (isolated_env / ".ftc-helper.yaml").write_text("work_dir: ~/robots\n")

        assert run_cli("config") == 0

        out = capsys.readouterr().out
        assert f"work_dir: {isolated_env / 'robots'}" in out

    def test_missing_config_file(self, tmp_path, capsys):
        assert run_cli("--config", str(tmp_path / "missing.yaml"), "config") == 1
        assert "config file not found" in capsys.readouterr().out

    def test_version_unknown(self, capsys):
        with patch(
            "ftchelper.cli.resolve_helper_version",
            side_effect=ConfigError("could not determine version"),
        ):
            assert run_cli("version") == 0
        assert capsys.readouterr().out.strip() == "Version: unknown"

    def test_version(self, capsys):
        with patch("ftchelper.cli.resolve_helper_version", return_value="0.1.0"):
            assert run_cli("version") == 0
        assert capsys.readouterr().out.strip() == "0.1.0"

    def test_list(self, requests_mock, capsys):
        requests_mock.get(FTC_RELEASES_API, json=[{"tag_name": "v10.1"}, {"tag_name": "v10.0"}])

        assert run_cli("list") == 0

        out = capsys.readouterr().out
        assert "Available FTC releases:" in out
        assert "- v10.1" in out
        assert "- v10.0" in out

    def test_list_network_error(self, requests_mock, capsys):
        requests_mock.get(FTC_RELEASES_API, status_code=500)

        assert run_cli("list") == 1
        assert "Error:" in capsys.readouterr().out

    def test_init_requires_project_name(self, work_dir, capsys):
        assert run_cli("-w", str(work_dir), "init", "v10.1") == 1
        assert "Project name is required" in capsys.readouterr().out

    def test_launch(self, work_dir, capsys):
        make_project(work_dir, "robot")

        with patch("ftchelper.cli.launch_studio", return_value=4321) as mock_launch:
            assert run_cli("-w", str(work_dir), "launch", "robot") == 0

        assert mock_launch.call_args.args[0] == work_dir / "robot"
        assert "(pid 4321)" in capsys.readouterr().out

    def test_pull(self, work_dir, capsys):
        with patch("ftchelper.cli.pull_project") as mock_pull:
            assert run_cli("-w", str(work_dir), "pull", "robot") == 0

        assert mock_pull.call_args.args[0] == "robot"
        assert "Pulling code for project 'robot'" in capsys.readouterr().out

    def test_push_failure_exit_code(self, work_dir, capsys):
        with patch(
            "ftchelper.cli.push_project",
            side_effect=CommandError("git push failed", returncode=1),
        ):
            assert run_cli("-w", str(work_dir), "push", "robot", "msg") == 1
        assert "Error: git push failed" in capsys.readouterr().out

    def test_tools(self, capsys):
        tools = ToolVersions(
            git="2.43.0",
            git_error=None,
            android_studio=None,
            android_studio_error="Could not find Android Studio executable.",
            android_studio_path=None,
        )
        with patch("ftchelper.cli.detect_tool_versions", return_value=tools):
            assert run_cli("tools") == 0

        out = capsys.readouterr().out
        assert "2.43.0" in out
        assert "Could not find Android Studio executable." in out

    def test_download_bambu(self, requests_mock, tmp_path, capsys):
        url = "https://public-cdn.bambulab.com/studio/Bambu_Studio_linux-v01.09.AppImage"
        requests_mock.get("https://bambulab.com/en-us/download/studio", text=f'<a href="{url}">')
        requests_mock.get(url, content=b"payload")
        out_dir = tmp_path / "downloads"
        out_dir.mkdir()

        code = run_cli("download-bambu", "--platform", "linux", "-o", str(out_dir))

        assert code == 0
        assert (out_dir / "Bambu_Studio_linux-v01.09.AppImage").read_bytes() == b"payload"
        assert "DOWNLOAD RESULTS" in capsys.readouterr().out

    def test_download_bad_platform(self, capsys):
        assert run_cli("download-studio", "--platform", "amiga") == 1
        assert "Unknown platform" in capsys.readouterr().out

    def test_verbose_installs_logger(self, work_dir, capsys):
        assert run_cli("-w", str(work_dir), "projects", "-v") == 0
        assert "[CONFIG]" in capsys.readouterr().out


def test_work_dir_flag_is_path(work_dir):
    with patch("ftchelper.cli.list_projects", return_value=[]) as mock_list:
        assert run_cli("-w", str(work_dir), "projects") == 0
    assert mock_list.call_args.args[0] == Path(work_dir)
