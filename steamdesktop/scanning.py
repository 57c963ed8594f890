import logging
from pathlib import Path
from typing import List, Optional

from .models import Game, LibraryEntry
from .utils import read_first_line, parse_app_id

logger = logging.getLogger(__name__)

def list_entries(common_dir: Path) -> List[LibraryEntry]:
    """Every immediate child of steamapps/common; filtering happens per entry."""
    return [LibraryEntry(name=p.name, path=p)
            for p in sorted(common_dir.iterdir(), key=lambda p: p.name.lower())]

def has_marker(entry: LibraryEntry, marker: str) -> bool:
    return entry.path.is_dir() and (entry.path / marker).is_file()

def load_game(entry: LibraryEntry, marker: str) -> Optional[Game]:
    marker_path = entry.path / marker
    try:
        raw = read_first_line(marker_path)
    except OSError as e:
        logger.error("Could not read %s: %s", marker_path, e)
        return None
    app_id = parse_app_id(raw)
    if app_id is None:
        logger.warning("Skipping '%s': no app id in %s (got %r)", entry.name, marker, raw)
        return None
    return Game(name=entry.name, id=app_id)
