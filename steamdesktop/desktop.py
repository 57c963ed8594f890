# steamdesktop/desktop.py
from __future__ import annotations

import logging
import tempfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional

from .icons import install_icon
from .models import LibraryEntry
from .scanning import list_entries, has_marker, load_game
from .templates import render_desktop_entry

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# One entry
# ──────────────────────────────────────────────────────────────────────────────

def desktop_path(cfg: dict, name: str) -> Path:
    return Path(cfg["APPLICATIONS_DIR"]) / f"{name}.desktop"

def create_desktop_file(entry: LibraryEntry, cfg: dict, workdir: Path) -> Optional[Path]:
    """
    Install the game's icon (best effort) and write its .desktop launcher.
    Returns the written path, or None when the entry was skipped or failed.
    """
    if not has_marker(entry, cfg["MARKER_FILE"]):
        logger.debug("Skipping '%s': no %s", entry.name, cfg["MARKER_FILE"])
        return None

    game = load_game(entry, cfg["MARKER_FILE"])
    if game is None:
        return None

    if install_icon(game.id, cfg, workdir):
        icon = cfg["ICON_NAME_FMT"].format(app_id=game.id)
    else:
        icon = cfg["FALLBACK_ICON"]

    dest = desktop_path(cfg, game.name)
    try:
        dest.write_text(render_desktop_entry(game, icon), encoding="utf-8")
    except OSError as e:
        logger.error("Could not write %s: %s", dest, e)
        return None
    logger.info("Created .desktop file for '%s' (%s).", game.name, game.id)
    return dest

# ──────────────────────────────────────────────────────────────────────────────
# Whole library
# ──────────────────────────────────────────────────────────────────────────────

def create_all_desktops(cfg: dict) -> List[Path]:
    try:
        entries = list_entries(Path(cfg["COMMON_DIR"]))
    except OSError as e:
        logger.error("Could not list %s: %s", cfg["COMMON_DIR"], e)
        return []
    logger.info("Found %d games.", len(entries))
    logger.info("Creating .desktop files...")

    try:
        Path(cfg["APPLICATIONS_DIR"]).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create %s: %s", cfg["APPLICATIONS_DIR"], e)

    written: List[Path] = []
    with tempfile.TemporaryDirectory(prefix="sdfg-") as tmp:
        with ThreadPoolExecutor(max_workers=cfg["MAX_WORKERS"]) as pool:
            futures = {}
            for i, entry in enumerate(entries):
                # each entry gets its own scratch dir; names can't collide
                workdir = Path(tmp) / f"{i:04d}"
                workdir.mkdir()
                futures[pool.submit(create_desktop_file, entry, cfg, workdir)] = entry

            for fut in as_completed(futures):
                entry = futures[fut]
                try:
                    dest = fut.result()
                except Exception:
                    logger.exception("Unexpected failure while processing '%s'", entry.name)
                    continue
                if dest is not None:
                    written.append(dest)

    logger.info("Wrote %d of %d .desktop files.", len(written), len(entries))
    return sorted(written)
