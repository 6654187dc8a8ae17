"""Save files — reads and writes snapshots as JSON on disk."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from grift.data.balance import BALANCE
from grift.engine.save import SaveData, SaveFormatError, snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)

SAVE_DIR = Path(os.environ.get("GRIFT_HOME", Path.home() / ".grift"))
SAVE_FILE = SAVE_DIR / BALANCE.save.file_name


def save_game(save: SaveData, path: Path = SAVE_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot_to_dict(save), indent=2))


def load_game(path: Path = SAVE_FILE) -> SaveData | None:
    """Load a snapshot. Missing or unreadable saves come back as None."""
    if not path.exists():
        return None
    try:
        return snapshot_from_dict(json.loads(path.read_text()))
    except (OSError, json.JSONDecodeError, SaveFormatError) as exc:
        logger.warning("Failed to load save data from %s: %s", path, exc)
        return None


def clear_save(path: Path = SAVE_FILE) -> None:
    path.unlink(missing_ok=True)


def has_save_data(path: Path = SAVE_FILE) -> bool:
    return path.exists()
