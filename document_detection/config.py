"""
Processing configuration for the document scanner.

Defaults can be overridden per call by passing a ProcessingConfig, or
process-wide through DOCSCAN_* environment variables (a .env file is loaded
with python-dotenv).
"""

import dataclasses
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv


INTERPOLATIONS = ("nearest", "linear", "cubic", "area", "lanczos")

ENV_PREFIX = "DOCSCAN_"


@dataclass(frozen=True)
class ProcessingConfig:
    """Immutable parameters of one scan call."""

    processing_size: int = 800
    min_area_fraction: float = 0.01
    approx_epsilon_factor: float = 0.02
    accepted_vertex_range: Tuple[int, int] = (4, 8)
    confidence_threshold: int = 40
    iou_threshold: float = 0.5
    rotation_ratio_threshold: float = 1.5
    warp_interpolation: str = "cubic"
    output_encoding_quality: float = 0.85
    output_format: str = ".jpg"
    orientation_band_fraction: float = 0.2
    orientation_grid_points: int = 1000
    blur_kernel_size: int = 5
    timeout_seconds: Optional[float] = None

    def __post_init__(self):
        if self.processing_size <= 0:
            raise ValueError(f"processing_size must be positive, got {self.processing_size}")
        if not 0 < self.min_area_fraction <= 1:
            raise ValueError(f"min_area_fraction must be in (0, 1], got {self.min_area_fraction}")
        if self.approx_epsilon_factor <= 0:
            raise ValueError(f"approx_epsilon_factor must be positive, got {self.approx_epsilon_factor}")

        low, high = self.accepted_vertex_range
        if low < 4 or high < low:
            raise ValueError(f"accepted_vertex_range must satisfy 4 <= low <= high, got {self.accepted_vertex_range}")

        if not 0 <= self.confidence_threshold <= 100:
            raise ValueError(f"confidence_threshold must be in [0, 100], got {self.confidence_threshold}")
        if not 0 < self.iou_threshold <= 1:
            raise ValueError(f"iou_threshold must be in (0, 1], got {self.iou_threshold}")
        if self.rotation_ratio_threshold <= 0:
            raise ValueError(f"rotation_ratio_threshold must be positive, got {self.rotation_ratio_threshold}")
        if self.warp_interpolation not in INTERPOLATIONS:
            raise ValueError(f"warp_interpolation must be one of {INTERPOLATIONS}, got {self.warp_interpolation!r}")
        if not 0 < self.output_encoding_quality <= 1:
            raise ValueError(f"output_encoding_quality must be in (0, 1], got {self.output_encoding_quality}")
        if not self.output_format.startswith("."):
            raise ValueError(f"output_format must be a file extension like '.jpg', got {self.output_format!r}")
        if not 0 < self.orientation_band_fraction <= 0.5:
            raise ValueError(f"orientation_band_fraction must be in (0, 0.5], got {self.orientation_band_fraction}")
        if self.orientation_grid_points <= 0:
            raise ValueError(f"orientation_grid_points must be positive, got {self.orientation_grid_points}")
        if self.blur_kernel_size <= 0 or self.blur_kernel_size % 2 == 0:
            raise ValueError(f"blur_kernel_size must be a positive odd number, got {self.blur_kernel_size}")
        if self.timeout_seconds is not None and self.timeout_seconds < 0:
            raise ValueError(f"timeout_seconds must not be negative, got {self.timeout_seconds}")

    def replace(self, **overrides) -> "ProcessingConfig":
        """Copy of this config with some fields changed."""
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "ProcessingConfig":
        """
        Build a config from DOCSCAN_* environment variables.

        Args:
            load_dotenv_file: Load a .env file into the environment first

        Returns:
            Config with every variable that is set applied over the defaults
        """
        if load_dotenv_file:
            load_dotenv()

        overrides = {}
        for field in dataclasses.fields(cls):
            raw = os.getenv(ENV_PREFIX + field.name.upper())
            if raw is None or raw.strip() == "":
                continue
            overrides[field.name] = _parse_env_value(field.name, raw.strip())

        return cls(**overrides)


def _parse_env_value(name: str, raw: str):
    default = getattr(ProcessingConfig, name, None)

    if name == "accepted_vertex_range":
        parts = [p for p in raw.replace(",", " ").split() if p]
        if len(parts) != 2:
            raise ValueError(f"{ENV_PREFIX}ACCEPTED_VERTEX_RANGE must hold two integers, got {raw!r}")
        return int(parts[0]), int(parts[1])
    if name == "timeout_seconds":
        return float(raw)
    if isinstance(default, bool):
        return raw.lower() in ("1", "true", "yes")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


_default_config: Optional[ProcessingConfig] = None


def get_config() -> ProcessingConfig:
    """Process-wide default config, read from the environment once."""
    global _default_config
    if _default_config is None:
        _default_config = ProcessingConfig.from_env()
    return _default_config


def set_config(config: Optional[ProcessingConfig]) -> None:
    """Replace the process-wide default; None re-reads the environment on next use."""
    global _default_config
    _default_config = config
