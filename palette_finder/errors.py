"""
Palette Finder Errors
"""


class PaletteFinderError(Exception):
    """Base error for the palette finder."""
    pass


class SettingsError(PaletteFinderError):
    """Settings file is unreadable or holds a malformed value."""
    pass


class ImageDecodeError(PaletteFinderError):
    """Input path is not a readable image."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not read the image: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
