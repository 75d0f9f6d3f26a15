"""
Application Constants.
Stores default values for UI configuration.
"""

# Window Configuration
WINDOW_TITLE = "WorldGrid - Game Map Viewer"
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 800
WINDOW_SETTINGS_KEY = "WorldGrid"
WINDOW_SETTINGS_APP = "WorldGrid"

# Dock Object Names
DOCK_OBJ_LAYERS = "LayersDock"

# Dock Titles
DOCK_TITLE_LAYERS = "Layers"

# Environment variables (may be set in .env)
ENV_MAP_IMAGE = "WORLDGRID_MAP_IMAGE"
ENV_OVERLAYS = "WORLDGRID_OVERLAYS"

# Status Messages
STATUS_COPIED_PREFIX = "Copied "
STATUS_MESSAGE_TIMEOUT_MS = 4000
