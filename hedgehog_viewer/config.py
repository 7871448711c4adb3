"""Constants, colours and persisted UI settings for the viewer."""

import json
import logging
import math
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

log = logging.getLogger("hedgehog_viewer.config")

APP_TITLE = "Mr. Hedgehog - Rust Call Graph Analyzer"
APP_VERSION = "0.4.0"
BACKEND_NAME = "mr_hedgehog"

# =====================================================================
#  Geometry
# =====================================================================
NODE_WIDTH = 150
NODE_HEIGHT = 50
NODE_RADIUS = 12
NODE_SPACING_X = 200
NODE_SPACING_Y = 100
MAX_COLUMNS = 5

LABEL_MAX_CHARS = 20
ELLIPSIS = "..."

ARROW_SIZE = 10
ARROW_ANGLE = math.pi / 6

GRID_SIZE = 50
ZOOM_STEP = 1.1
FIT_MARGIN = 50
FIT_SHRINK = 0.9
PLACEHOLDER_MARGIN = 100

# rough metrics used to size text items without a font backend
FONT_SIZE = 10
PLACEHOLDER_FONT_SIZE = 16
CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.5

# =====================================================================
#  Creatures
# =====================================================================
CREATURE_COUNT = 2
CREATURE_SPEED = 2.0
CREATURE_FOOTPRINT = 50
CREATURE_RETARGET_DISTANCE = 20
CREATURE_COUNTDOWN = (100, 300)
CREATURE_WOBBLE = 0.2
CREATURE_FACING_DEAD_ZONE = 0.1
CREATURE_TICK_MS = 16
DEFAULT_CREATURE_BOUNDS = (-300, -200, 600, 400)

# =====================================================================
#  Colours
# =====================================================================
COLOR_PALETTE = {
    "background":  "#11111b",
    "grid":        "#1e1e2e",
    "node":        {"fill": "#313244", "border": "#89b4fa"},
    "label":       "#cdd6f4",
    "edge":        "#a6adc8",
    "placeholder": "#6c7086",
    "creature":    {"body": "#8b5a2b", "spikes": "#5c3a1a", "face": "#e8c39e"},
}

# =====================================================================
#  Messages
# =====================================================================
INITIAL_MESSAGE = "Select a folder and click 'Run Analysis'\nto visualize the call graph"
NO_NODES_MESSAGE = "No nodes found in the call graph"
OPEN_FAILED_MESSAGE = "Failed to open output file:\n"
BACKEND_MISSING_MESSAGE = "Backend not found.\nPlease ensure 'mr_hedgehog' is built."
ANALYSIS_FAILED_MESSAGE = "Analysis failed:\n"
NO_OUTPUT_MESSAGE = "Analysis completed but no output generated."


# =====================================================================
#  Settings
# =====================================================================
@dataclass
class Settings:
    last_folder: str = ""
    geometry: str = "1400x900"
    show_creatures: bool = True
    backend_path: str = ""


def settings_dir() -> Path:
    override = os.environ.get("HEDGEHOG_VIEWER_HOME")
    if override:
        return Path(override)
    return Path.home() / ".hedgehog_viewer"


def settings_path() -> Path:
    return settings_dir() / "settings.json"


def load_settings(path=None) -> Settings:
    """Read settings from disk, falling back to defaults for anything missing or broken."""
    path = Path(path) if path else settings_path()
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()
    if not isinstance(data, dict):
        log.warning("Ignoring malformed settings file %s", path)
        return Settings()
    known = {f.name for f in fields(Settings)}
    return Settings(**{k: v for k, v in data.items() if k in known})


def save_settings(settings: Settings, path=None) -> Path:
    path = Path(path) if path else settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    log.debug("Saved settings to %s", path)
    return path
