"""
Test settings file parsing and loading.
"""
import pytest
from pydantic import ValidationError

from palette_finder.errors import SettingsError
from palette_finder.settings import (
    Settings, DEFAULT_SETTINGS, parse_settings, load_settings, with_path
)

VALID_LINES = [
    "8", "100", "640", "480", "64", "70", "/data/packages/", "0.95", "0", "1",
]


def write_settings(tmp_path, lines):
    settings_file = tmp_path / "settings.txt"
    settings_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return settings_file


class TestDefaults:
    """Built-in defaults"""

    def test_default_values(self):
        assert DEFAULT_SETTINGS.n_clusters == 6
        assert DEFAULT_SETTINGS.resize == 120
        assert (DEFAULT_SETTINGS.win_w, DEFAULT_SETTINGS.win_h) == (512, 512)
        assert (DEFAULT_SETTINGS.color_w, DEFAULT_SETTINGS.color_h) == (128, 139)
        assert DEFAULT_SETTINGS.path == "../dataset/"
        assert DEFAULT_SETTINGS.threshold == 0.99
        assert DEFAULT_SETTINGS.vertical is True
        assert DEFAULT_SETTINGS.reverse is True
        assert DEFAULT_SETTINGS.ordering == "columns"
        assert DEFAULT_SETTINGS.colors == 5

    def test_settings_are_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_SETTINGS.n_clusters = 3

    def test_single_cluster_rejected(self):
        with pytest.raises(ValidationError):
            Settings(n_clusters=1)


class TestParseSettings:
    """Fixed-order settings parsing"""

    def test_parse_valid_lines(self):
        settings = parse_settings(VALID_LINES)

        assert settings.n_clusters == 8
        assert settings.resize == 100
        assert (settings.win_w, settings.win_h) == (640, 480)
        assert (settings.color_w, settings.color_h) == (64, 70)
        assert settings.path == "/data/packages/"
        assert settings.threshold == pytest.approx(0.95)
        assert settings.vertical is False
        assert settings.reverse is True
        assert settings.colors == 7

    def test_flags_only_true_for_one(self):
        lines = VALID_LINES[:8] + ["2", "1"]
        settings = parse_settings(lines)
        assert settings.vertical is False
        assert settings.reverse is True

    def test_optional_ordering_line(self):
        settings = parse_settings(VALID_LINES + ["luminance"])
        assert settings.ordering == "luminance"

    def test_blank_ordering_line_keeps_default(self):
        settings = parse_settings(VALID_LINES + [""])
        assert settings.ordering == "columns"

    def test_missing_line(self):
        with pytest.raises(SettingsError, match="Missing value for 'reverse'"):
            parse_settings(VALID_LINES[:9])

    def test_malformed_integer(self):
        lines = ["six"] + VALID_LINES[1:]
        with pytest.raises(SettingsError, match="n_clusters"):
            parse_settings(lines)

    def test_out_of_range_threshold(self):
        lines = VALID_LINES[:7] + ["1.5"] + VALID_LINES[8:]
        with pytest.raises(SettingsError):
            parse_settings(lines)

    def test_unknown_ordering(self):
        with pytest.raises(SettingsError):
            parse_settings(VALID_LINES + ["hue"])


class TestLoadSettings:
    """Settings file loading with fallback"""

    def test_load_valid_file(self, tmp_path):
        settings = load_settings(str(write_settings(tmp_path, VALID_LINES)))
        assert settings.n_clusters == 8
        assert settings.path == "/data/packages/"

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / "absent.txt"))
        assert settings == DEFAULT_SETTINGS

    def test_malformed_file_is_not_partially_applied(self, tmp_path):
        lines = VALID_LINES[:5] + ["tall"] + VALID_LINES[6:]
        settings = load_settings(str(write_settings(tmp_path, lines)))

        # Lines before the bad one must not leak into the result
        assert settings == DEFAULT_SETTINGS
        assert settings.n_clusters == 6

    def test_non_utf8_file_falls_back_to_defaults(self, tmp_path):
        settings_file = tmp_path / "settings.txt"
        settings_file.write_bytes(b"8\n100\n640\n480\n64\n70\n/data/caf\xe9/\n0.95\n0\n1\n")

        settings = load_settings(str(settings_file))
        assert settings == DEFAULT_SETTINGS

    def test_with_path_overrides_only_path(self):
        settings = with_path(DEFAULT_SETTINGS, "/tmp/pics")
        assert settings.path == "/tmp/pics"
        assert settings.n_clusters == DEFAULT_SETTINGS.n_clusters
        assert DEFAULT_SETTINGS.path == "../dataset/"
