"""
Palette Finder Run Settings
Immutable per-run detection parameters and the plain-text settings file loader.

The settings file holds one value per line in a fixed order:

    n_clusters  : color count of the clusters
    resize      : square size the smoothed image is reduced to before clustering
    win_w       : result window width
    win_h       : result window height
    color_w     : swatch cell width
    color_h     : swatch cell height
    path        : images path
    threshold   : similarity of swatch and pattern
    vertical    : 1 stacks swatch cells top-to-bottom, 0 left-to-right
    reverse     : 1 renders the swatch lighter-to-darker
    ordering    : optional, "columns" (default) or "luminance"
"""
from pathlib import Path
from typing import Iterable, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from palette_finder.errors import SettingsError
from palette_finder.utils.logging import get_logger


class Settings(BaseModel):
    """Detection parameters, read once and never mutated."""
    model_config = ConfigDict(frozen=True)

    n_clusters: int = Field(6, ge=2, description="Cluster count; one cluster is dropped as background")
    resize: int = Field(120, gt=0, description="Square sampling size used for clustering")
    win_w: int = Field(512, gt=0, description="Result window width")
    win_h: int = Field(512, gt=0, description="Result window height")
    color_w: int = Field(128, gt=0, description="Swatch cell width")
    color_h: int = Field(139, gt=0, description="Swatch cell height")
    path: str = Field("../dataset/", description="Image file or directory")
    threshold: float = Field(0.99, ge=0.0, le=1.0, description="Minimum correlation score")
    vertical: bool = Field(True, description="Stack swatch cells top-to-bottom")
    reverse: bool = Field(True, description="Reverse swatch and candidate order")
    ordering: Literal["columns", "luminance"] = Field(
        "columns",
        description="How cluster centers are ordered before the background is dropped"
    )

    @property
    def colors(self) -> int:
        """Number of rendered swatch cells (background cluster excluded)."""
        return self.n_clusters - 1


DEFAULT_SETTINGS = Settings()

# (field, parser, log tag) in file order
_FIELDS = [
    ("n_clusters", int, "n_c"),
    ("resize", int, "rs"),
    ("win_w", int, "win_w"),
    ("win_h", int, "win_h"),
    ("color_w", int, "color_w"),
    ("color_h", int, "color_h"),
    ("path", str, "path"),
    ("threshold", float, "thr"),
    ("vertical", lambda v: int(v) == 1, "ver"),
    ("reverse", lambda v: int(v) == 1, "rev"),
]


def parse_settings(lines: Iterable[str]) -> Settings:
    """
    Parse settings file lines.

    Args:
        lines: File lines, in the fixed order documented above

    Returns:
        Validated Settings

    Raises:
        SettingsError: If a required line is missing, malformed or out of range
    """
    rows: List[str] = [line.rstrip("\r\n") for line in lines]
    values = {}

    for index, (name, parse, _) in enumerate(_FIELDS):
        if index >= len(rows):
            raise SettingsError(f"Missing value for '{name}' on line {index + 1}")
        raw = rows[index]
        try:
            values[name] = parse(raw) if name == "path" else parse(raw.strip())
        except ValueError:
            raise SettingsError(f"Malformed value for '{name}' on line {index + 1}: {raw!r}")

    if len(rows) > len(_FIELDS) and rows[len(_FIELDS)].strip():
        values["ordering"] = rows[len(_FIELDS)].strip()

    try:
        return Settings(**values)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}")


def load_settings(path: str) -> Settings:
    """
    Load settings from a file, falling back to defaults on any error.

    The load is all-or-nothing: a file with one bad line yields
    DEFAULT_SETTINGS, never a partially applied file.
    """
    logger = get_logger()

    try:
        with Path(path).open("r", encoding="utf-8") as f:
            settings = parse_settings(f.readlines())
    except (OSError, UnicodeDecodeError, SettingsError) as e:
        logger.error("Error reading the settings file!", extra={"path": str(path), "reason": str(e)})
        return DEFAULT_SETTINGS

    for name, _, tag in _FIELDS:
        logger.info(f"{tag}\t: {getattr(settings, name)}")
    logger.debug(f"ordering\t: {settings.ordering}")

    return settings


def with_path(settings: Settings, path: str) -> Settings:
    """Return a copy of settings with the source path overridden."""
    return settings.model_copy(update={"path": path})
