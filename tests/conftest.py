"""
Pytest configuration and shared test utilities.

Every test runs with its own HOME, KIT_EXT_DIR and working directory so the
real user configuration is never read and navigation shortcuts cannot move
the test process anywhere permanent.
"""

import textwrap
from pathlib import Path

import pytest

from kit.commands import CommandRegistry, HelpService, ShortcutKind, compile_shortcuts, parse_shortcut_lines
from kit.commands.builder import RegistrySettings
from kit.utils.config import reset_config

# ===================================================================
# Environment isolation
# ===================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME, KIT_EXT_DIR and the working directory at temp dirs."""
    home = tmp_path / "home"
    ext_dir = tmp_path / "ext"
    workdir = tmp_path / "work"
    for directory in (home, ext_dir, workdir):
        directory.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("KIT_EXT_DIR", str(ext_dir))
    for var in ("KIT_CONFIG", "KIT_AUTO_SHORTCUTS", "KIT_AUTO_EDITORS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(workdir)

    reset_config()
    yield {"home": home, "ext_dir": ext_dir, "workdir": workdir}
    reset_config()


@pytest.fixture
def home(isolated_env) -> Path:
    return isolated_env["home"]


@pytest.fixture
def ext_dir(isolated_env) -> Path:
    return isolated_env["ext_dir"]


# ===================================================================
# Operation modules
# ===================================================================


def module_source(
    category: str = "Testing",
    functions: str = "",
    body: str = "",
    description: str = "Test helpers",
    dependencies: str = "none",
) -> str:
    """Render an operation module with the standard four-field header."""
    header = (
        f"# test module\n"
        f"# Category: {category}\n"
        f"# Description: {description}\n"
        f"# Dependencies: {dependencies}\n"
        f"# Functions: {functions}\n"
    )
    return header + "\n" + textwrap.dedent(body)


@pytest.fixture
def functions_dir(tmp_path) -> Path:
    directory = tmp_path / "functions"
    directory.mkdir()
    return directory


@pytest.fixture
def write_module(functions_dir):
    """Factory writing an operation module into ``functions_dir``.

    Examples:
        Declaring a module with one operation::

            write_module("deploy.py", functions="deploy", body='''
                def deploy(args):
                    \"\"\"Usage: kit deploy\"\"\"
                    return 0
            ''')
    """

    def _write(filename: str, **kwargs) -> Path:
        path = functions_dir / filename
        path.write_text(module_source(**kwargs), encoding="utf-8")
        return path

    return _write


# ===================================================================
# Registries
# ===================================================================


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def compile_lines():
    """Compile raw shortcut config lines into ``registry``."""

    def _compile(registry: CommandRegistry, kind: ShortcutKind, *lines: str):
        records, diagnostics = parse_shortcut_lines(lines, source=f"{kind.value}.conf")
        result = compile_shortcuts(records, kind, registry)
        result.diagnostics[:0] = diagnostics
        return result

    return _compile


@pytest.fixture
def settings(functions_dir, ext_dir) -> RegistrySettings:
    """Settings that scan only ``functions_dir`` and read conf files from ``ext_dir``."""
    return RegistrySettings(
        functions_dirs=[functions_dir],
        shortcuts_file=ext_dir / "shortcuts.conf",
        editors_file=ext_dir / "editor.conf",
    )


@pytest.fixture
def help_service(registry) -> HelpService:
    return HelpService(registry, version="0.0.test")
