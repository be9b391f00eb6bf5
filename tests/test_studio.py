"""
Tests for ftchelper.project.studio module.

Tests Android Studio support including:
- Executable lookup order (environment, config, install locations)
- Version detection from product-info.json and build.txt
- Launch command per platform
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ftchelper.config import HelperConfig
from ftchelper.discovery.platforms import Platform
from ftchelper.exceptions import ConfigError, ProjectError, VersionNotFoundError
from ftchelper.project.studio import (
    detect_android_studio_version,
    find_studio_executable,
    launch_studio,
)


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestFindStudioExecutable:
    """Tests for find_studio_executable."""

    def test_environment_variable_first(self, tmp_path):
        exe = _touch(tmp_path / "custom" / "studio64.exe")
        configured = _touch(tmp_path / "configured" / "studio64.exe")
        config = HelperConfig(work_dir=tmp_path, android_studio_path=configured)

        found = find_studio_executable(
            config, env={"ANDROID_STUDIO_PATH": str(exe)}, platform=Platform.WINDOWS
        )

        assert found == exe

    def test_missing_environment_path_falls_through_to_config(self, tmp_path):
        configured = _touch(tmp_path / "configured" / "studio.sh")
        config = HelperConfig(work_dir=tmp_path, android_studio_path=configured)

        found = find_studio_executable(
            config,
            env={"ANDROID_STUDIO_PATH": str(tmp_path / "gone.exe")},
            platform=Platform.LINUX,
        )

        assert found == configured

    def test_windows_program_files(self, tmp_path):
        base = tmp_path / "Program Files"
        _touch(base / "Android" / "Android Studio" / "bin" / "studio.exe")
        studio64 = _touch(base / "Android" / "Android Studio" / "bin" / "studio64.exe")

        found = find_studio_executable(
            HelperConfig(work_dir=tmp_path),
            env={"ProgramFiles": str(base)},
            platform=Platform.WINDOWS,
        )

        assert found == studio64

    def test_windows_jetbrains_layout_under_x86(self, tmp_path):
        base = tmp_path / "Program Files (x86)"
        exe = _touch(base / "JetBrains" / "AndroidStudio" / "bin" / "studio.exe")

        found = find_studio_executable(
            HelperConfig(work_dir=tmp_path),
            env={"ProgramFiles(x86)": str(base)},
            platform=Platform.WINDOWS,
        )

        assert found == exe

    @pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
    def test_linux_path_lookup(self, tmp_path):
        bin_dir = tmp_path / "bin"
        exe = _touch(bin_dir / "android-studio", "#!/bin/sh\n")
        exe.chmod(0o755)

        found = find_studio_executable(
            HelperConfig(work_dir=tmp_path),
            env={"PATH": str(bin_dir)},
            platform=Platform.LINUX,
        )

        assert found == exe

    def test_not_found(self, tmp_path):
        with pytest.raises(ConfigError, match="ANDROID_STUDIO_PATH"):
            find_studio_executable(
                HelperConfig(work_dir=tmp_path), env={}, platform=Platform.WINDOWS
            )


class TestDetectVersion:
    """Tests for detect_android_studio_version."""

    def test_product_info_at_root(self, tmp_path):
        exe = _touch(tmp_path / "Android Studio" / "bin" / "studio64.exe")
        _touch(
            tmp_path / "Android Studio" / "product-info.json",
            json.dumps({"name": "Android Studio", "versionName": "2023.1.1", "version": "231"}),
        )

        assert detect_android_studio_version(exe) == "2023.1.1"

    def test_mac_resources_layout(self, tmp_path):
        contents = tmp_path / "Android Studio.app" / "Contents"
        exe = _touch(contents / "MacOS" / "studio")
        _touch(contents / "Resources" / "product-info.json", '{"version": 14.0}')

        assert detect_android_studio_version(exe) == "14"

    def test_skips_unparsable_candidate(self, tmp_path):
        exe = _touch(tmp_path / "bin" / "studio.sh")
        _touch(tmp_path / "product-info.json", "{broken")
        _touch(tmp_path / "product-info" / "product-info.json", '{"other": 1}')
        _touch(tmp_path / "lib" / "product-info.json", '{"fullVersion": "2022.3.1 Patch 2"}')

        assert detect_android_studio_version(exe) == "2022.3.1 Patch 2"

    def test_build_txt_fallback(self, tmp_path):
        exe = _touch(tmp_path / "bin" / "studio.sh")
        _touch(tmp_path / "build.txt", "  AI-231.9392.1.2311.11076708\n")

        assert detect_android_studio_version(exe) == "AI-231.9392.1.2311.11076708"

    @pytest.mark.parametrize("build_txt", [None, "   \n"])
    def test_nothing_found(self, tmp_path, build_txt):
        exe = _touch(tmp_path / "bin" / "studio.sh")
        if build_txt is not None:
            _touch(tmp_path / "build.txt", build_txt)

        with pytest.raises(VersionNotFoundError):
            detect_android_studio_version(exe)


class TestLaunchStudio:
    """Tests for launch_studio."""

    @pytest.fixture
    def project(self, tmp_path) -> Path:
        path = tmp_path / "robot"
        path.mkdir()
        return path

    def test_mac(self, tmp_path, project):
        spawner = MagicMock(return_value=321)

        pid = launch_studio(project, HelperConfig(work_dir=tmp_path), Platform.MAC, spawner=spawner)

        assert pid == 321
        assert spawner.call_args.args == ("open", ["-a", "Android Studio.app", str(project)])

    def test_linux(self, tmp_path, project):
        spawner = MagicMock(return_value=1)

        launch_studio(project, HelperConfig(work_dir=tmp_path), Platform.LINUX, spawner=spawner)

        assert spawner.call_args.args == ("android-studio", [str(project)])

    def test_windows_uses_found_executable(self, tmp_path, project):
        exe = _touch(tmp_path / "as" / "bin" / "studio64.exe")
        spawner = MagicMock(return_value=7)

        launch_studio(
            project,
            HelperConfig(work_dir=tmp_path),
            Platform.WINDOWS,
            env={"ANDROID_STUDIO_PATH": str(exe)},
            spawner=spawner,
        )

        assert spawner.call_args.args == (str(exe), [str(project)])

    def test_missing_project(self, tmp_path):
        with pytest.raises(ProjectError):
            launch_studio(
                tmp_path / "ghost", HelperConfig(work_dir=tmp_path), Platform.LINUX,
                spawner=MagicMock(),
            )

    def test_unsupported_os(self, tmp_path, project):
        with patch("ftchelper.project.studio.detect_platform", return_value=None):
            with pytest.raises(ConfigError, match="Unsupported operating system"):
                launch_studio(project, HelperConfig(work_dir=tmp_path), spawner=MagicMock())
