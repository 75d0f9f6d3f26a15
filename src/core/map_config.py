"""
Map Configuration Module.

Defines the immutable MapConfig used by the coordinate transforms, the
map surface and the interaction layer, and loads it from a JSON file.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WORLDGRID_CONFIG"


class MapConfigError(ValueError):
    """Raised when a map configuration cannot be loaded or is invalid."""


@dataclass(frozen=True)
class MapConfig:
    """
    Session-wide map parameters.

    Attributes:
        map_size: Pixel span of the rendered map image.
        max_bounds: Span of the world coordinate system the image represents.
        init_zoom: Zoom level on startup.
        min_zoom: Lowest zoom level.
        max_zoom: Highest zoom level.
        tile_size: Tile edge in pixels.
        grid_size: World units per grid square in grid references.
        sat_url: Satellite tile endpoint.
        topo_url: Topographic tile endpoint.
    """

    map_size: float = 1024
    max_bounds: float = 1024
    init_zoom: int = 0
    min_zoom: int = -2
    max_zoom: int = 4
    tile_size: int = 256
    grid_size: int = 100
    sat_url: str = ""
    topo_url: str = ""

    def __post_init__(self):
        """Validates sizes and the zoom range."""
        if self.map_size <= 0:
            raise ValueError(f"map_size must be positive, got {self.map_size}")
        if self.max_bounds <= 0:
            raise ValueError(f"max_bounds must be positive, got {self.max_bounds}")
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.min_zoom > self.max_zoom:
            raise ValueError(
                f"min_zoom ({self.min_zoom}) exceeds max_zoom ({self.max_zoom})"
            )
        if not (self.min_zoom <= self.init_zoom <= self.max_zoom):
            raise ValueError(
                f"init_zoom {self.init_zoom} outside [{self.min_zoom}, {self.max_zoom}]"
            )

    @property
    def scale(self) -> float:
        """World units per map pixel."""
        return self.max_bounds / self.map_size

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the config to a dictionary for JSON serialization.

        Returns:
            Dict[str, Any]: All configuration fields.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MapConfig":
        """
        Creates a MapConfig from a dictionary.

        Missing keys keep their defaults. Unknown keys are ignored
        with a warning.

        Args:
            data: Dictionary containing configuration values.

        Returns:
            MapConfig: A new MapConfig instance.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown map config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_map_config(path: Optional[Union[str, Path]] = None) -> MapConfig:
    """
    Loads the map configuration from a JSON file.

    When path is None the WORLDGRID_CONFIG environment variable is used.
    Without either, the default configuration is returned.

    Args:
        path: Optional path to a JSON config file.

    Returns:
        MapConfig: The loaded configuration.

    Raises:
        MapConfigError: If the file cannot be read, is not valid JSON,
            or holds invalid values.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        logger.info("No map config given, using defaults")
        return MapConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise MapConfigError(f"Cannot read map config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MapConfigError(f"Invalid JSON in map config {path}: {e}") from e

    if not isinstance(data, dict):
        raise MapConfigError(f"Map config {path} must contain a JSON object")

    try:
        config = MapConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise MapConfigError(f"Invalid map config {path}: {e}") from e

    logger.info(
        f"Loaded map config from {path}: map_size={config.map_size}, "
        f"max_bounds={config.max_bounds}"
    )
    return config
