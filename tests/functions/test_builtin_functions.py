"""Tests for the built-in operation modules."""

import os
import subprocess
from unittest import mock

import pytest

from kit.functions import listing, system


class TestMklink:
    def test_creates_symlink(self, isolated_env, capsys):
        (isolated_env["workdir"] / "target").mkdir()

        assert system.mklink(["target", "alias"]) == 0

        assert os.readlink("alias") == "target"
        assert "Created symbolic link" in capsys.readouterr().out

    def test_help(self, capsys):
        assert system.mklink(["--help"]) == 0
        assert "Usage: kit mklink <target> <link_name>" in capsys.readouterr().out

    @pytest.mark.parametrize("args", [[], ["one"], ["a", "b", "c"]])
    def test_wrong_argument_count(self, args, capsys):
        assert system.mklink(args) == 2
        assert "Exactly 2 arguments required" in capsys.readouterr().err

    def test_missing_target(self):
        assert system.mklink(["nope", "alias"]) == 1
        assert not os.path.lexists("alias")

    def test_existing_destination(self, isolated_env):
        (isolated_env["workdir"] / "target").mkdir()
        (isolated_env["workdir"] / "alias").write_text("", encoding="utf-8")
        assert system.mklink(["target", "alias"]) == 1


class TestZed:
    def test_help_without_arguments(self, capsys):
        assert system.zed([]) == 0
        assert "Usage: kit zed <filepath>" in capsys.readouterr().out

    def test_missing_target(self):
        assert system.zed(["missing.txt"]) == 1

    def test_zed_not_installed(self, capsys):
        with mock.patch.object(system, "zed_command", return_value=None):
            assert system.zed(["."]) == 1
        assert "Zed editor not found" in capsys.readouterr().err

    def test_launches_zed(self):
        with mock.patch.object(system, "zed_command", return_value=["/usr/bin/zed"]), \
                mock.patch("kit.functions.system.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            assert system.zed(["."]) == 0
        mock_run.assert_called_once_with(["/usr/bin/zed", "."], check=False)

    def test_zed_command_on_linux(self):
        with mock.patch("kit.functions.system.platform.system", return_value="Linux"), \
                mock.patch("kit.functions.system.shutil.which", return_value="/usr/bin/zed"):
            assert system.zed_command() == ["/usr/bin/zed"]

    def test_zed_command_missing(self):
        with mock.patch("kit.functions.system.platform.system", return_value="Linux"), \
                mock.patch("kit.functions.system.shutil.which", return_value=None):
            assert system.zed_command() is None


class TestListing:
    @pytest.mark.parametrize(
        "handler,flags",
        [
            (listing.list_files, ["-lt"]),
            (listing.list_all, ["-lat"]),
            (listing.list_reverse, ["-ltr"]),
            (listing.list_all_reverse, ["-latr"]),
            (listing.list_tree, ["--tree"]),
        ],
    )
    def test_runs_lsd_with_flags(self, handler, flags):
        with mock.patch("kit.functions._common.shutil.which", return_value="/usr/bin/lsd"), \
                mock.patch("kit.functions.listing.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            assert handler(["~/projects"]) == 0
        mock_run.assert_called_once_with(["/usr/bin/lsd", *flags, "~/projects"], check=False)

    def test_defaults_to_current_directory(self):
        with mock.patch("kit.functions._common.shutil.which", return_value="/usr/bin/lsd"), \
                mock.patch("kit.functions.listing.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            listing.list_files([])
        assert mock_run.call_args.args[0][-1] == "."

    def test_lsd_missing(self, capsys):
        with mock.patch("kit.functions._common.shutil.which", return_value=None), \
                mock.patch("kit.functions.listing.subprocess.run") as mock_run:
            assert listing.list_tree([]) == 1
        mock_run.assert_not_called()
        assert "lsd not installed" in capsys.readouterr().err

    def test_help(self, capsys):
        assert listing.list_all(["-h"]) == 0
        assert "Usage: kit list-all [directory]" in capsys.readouterr().out
