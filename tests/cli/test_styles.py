"""Tests for theme selection and message helpers."""

from kit.cli import styles
from kit.cli.styles import (
    DEFAULT_THEME,
    PAPER_THEME,
    ColorTheme,
    Messages,
    load_theme_from_config,
    set_theme,
)


def write_config(tmp_path, text):
    path = tmp_path / "config.yml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestThemeLoading:
    def test_default_theme(self):
        assert load_theme_from_config() is DEFAULT_THEME

    def test_named_theme(self, tmp_path):
        assert load_theme_from_config(write_config(tmp_path, "cli:\n  theme: paper\n")) is PAPER_THEME

    def test_unknown_theme_falls_back(self, tmp_path):
        assert load_theme_from_config(write_config(tmp_path, "cli:\n  theme: neon\n")) is DEFAULT_THEME

    def test_custom_theme(self, tmp_path):
        config = write_config(
            tmp_path,
            "cli:\n"
            "  theme: custom\n"
            "  custom_theme:\n"
            "    accent: '#112233'\n"
            "    success: '#00ff00'\n",
        )
        theme = load_theme_from_config(config)
        assert isinstance(theme, ColorTheme)
        assert theme.accent == "#112233"
        assert theme.success == "#00ff00"

    def test_custom_theme_with_bad_color(self, tmp_path):
        config = write_config(tmp_path, "cli:\n  theme: custom\n  custom_theme:\n    accent: red\n")
        assert load_theme_from_config(config) is DEFAULT_THEME

    def test_custom_theme_with_unknown_key(self, tmp_path):
        config = write_config(tmp_path, "cli:\n  theme: custom\n  custom_theme:\n    sparkle: '#ffffff'\n")
        assert load_theme_from_config(config) is DEFAULT_THEME


def test_set_theme_updates_active_theme():
    set_theme(PAPER_THEME)
    try:
        assert styles.get_active_theme() is PAPER_THEME
    finally:
        set_theme(DEFAULT_THEME)


def test_messages_wrap_text_in_theme_styles():
    assert Messages.success("done") == "[success]✓ done[/success]"
    assert Messages.error("bad").startswith("[error]")
    assert "careful" in Messages.warning("careful")
