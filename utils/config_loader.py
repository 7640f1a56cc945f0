"""Configuration management utilities."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from series_io.parser import ColumnLayout
from timeline.mapper import DEFAULT_FRAME_RATE

logger = logging.getLogger(__name__)


def load_config(config_path) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file (str or Path)

    Returns:
        Dictionary containing configuration (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    logger.debug(f"Loaded config keys: {list(config.keys())}")

    return config


def get_nested_config(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get nested configuration value using dot notation.

    Example:
        get_nested_config(config, 'series.channel_a_column', default=3)

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path to value
        default: Default value if path not found

    Returns:
        Configuration value or default
    """
    keys = key_path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


@dataclass(frozen=True)
class TrimSettings:
    """
    Typed view of the trim configuration.

    Attributes:
        frame_rate: Assumed video frames per second
        layout: Input CSV column layout
        data_filename: Name of the trimmed CSV
        video_filename: Name of the trimmed video
        video_codec: FourCC used when recording the trimmed video
        plot_y_limits: Force axis range of the timeline plot
    """
    frame_rate: float = DEFAULT_FRAME_RATE
    layout: ColumnLayout = field(default_factory=ColumnLayout)
    data_filename: str = 'trimmed-data.csv'
    video_filename: str = 'trimmed-video.mp4'
    video_codec: str = 'mp4v'
    plot_y_limits: Tuple[float, float] = (-500.0, 2000.0)

    def __post_init__(self):
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate}")
        if len(self.video_codec) != 4:
            raise ValueError(f"video_codec must be a FourCC, got {self.video_codec!r}")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'TrimSettings':
        """Build settings from a loaded config dict, defaulting every missing key."""
        config = config or {}
        defaults = cls()
        layout_defaults = defaults.layout

        layout = ColumnLayout(
            delimiter=str(get_nested_config(config, 'series.delimiter', layout_defaults.delimiter)),
            min_fields=int(get_nested_config(config, 'series.min_fields', layout_defaults.min_fields)),
            time_column=int(get_nested_config(config, 'series.time_column', layout_defaults.time_column)),
            channel_a_column=int(get_nested_config(
                config, 'series.channel_a_column', layout_defaults.channel_a_column
            )),
            channel_b_column=int(get_nested_config(
                config, 'series.channel_b_column', layout_defaults.channel_b_column
            )),
        )

        return cls(
            frame_rate=float(get_nested_config(config, 'timeline.frame_rate', defaults.frame_rate)),
            layout=layout,
            data_filename=get_nested_config(config, 'export.data_filename', defaults.data_filename),
            video_filename=get_nested_config(config, 'export.video_filename', defaults.video_filename),
            video_codec=get_nested_config(config, 'export.video_codec', defaults.video_codec),
            plot_y_limits=(
                float(get_nested_config(config, 'plot.y_min', defaults.plot_y_limits[0])),
                float(get_nested_config(config, 'plot.y_max', defaults.plot_y_limits[1])),
            ),
        )
