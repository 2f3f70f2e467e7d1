"""
Palette Finder Configuration
Process-level settings read from environment variables.

Per-run detection parameters live in the settings file (see settings.py);
this module only covers how the process itself behaves.
"""
import os


class Config:
    """Configuration class for Palette Finder."""

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTE_LOG_LEVEL", "INFO")

    # Settings file location (one value per line)
    SETTINGS_FILE: str = os.environ.get("PALETTE_SETTINGS_FILE", "../settings.txt")

    # Display
    HEADLESS: bool = bool(int(os.environ.get("PALETTE_HEADLESS", "0")))

    # Quantization
    KMEANS_SEED: int = int(os.environ.get("PALETTE_KMEANS_SEED", "42"))
    KMEANS_ATTEMPTS: int = 10
    KMEANS_MAX_ITER: int = 100

    # Smoothing kernel applied before sampling and matching
    BLUR_KERNEL: int = 19

    # Candidates closer than this along the cross-stacking axis collapse into one
    DUPLICATE_GATE_PX: int = int(os.environ.get("PALETTE_DUPLICATE_GATE_PX", "7"))

    @classmethod
    def validate_blur_kernel(cls, kernel: int) -> bool:
        """Validate Gaussian kernel size."""
        return kernel >= 1 and kernel % 2 == 1

    @classmethod
    def validate_gate(cls, gate: int) -> bool:
        """Validate duplicate gate distance."""
        return gate >= 0


# Global config instance
config = Config()
