from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

import requests
from PIL import Image

from .models import IconCandidate
from .steamcmd import resolve_icon_hash

logger = logging.getLogger(__name__)

# icotool -x names its output <base>_<index>_<W>x<H>x<D>.png
SIZE_RE = re.compile(r"(\d+)x(\d+)x(\d+)\.png$")

CHUNK = 64 * 1024

# ──────────────────────────────────────────────────────────────────────────────
# Download
# ──────────────────────────────────────────────────────────────────────────────

def icon_url(base: str, app_id: str, icon_hash: str) -> str:
    return f"{base}{app_id}/{icon_hash}.ico"

def download_icon(app_id: str, cfg: dict, workdir: Path) -> Optional[Path]:
    icon_hash = resolve_icon_hash(app_id, cfg)
    if not icon_hash:
        return None

    url = icon_url(cfg["ICON_BASE_URL"], app_id, icon_hash)
    logger.info("Fetching %s", url)
    try:
        r = requests.get(url, stream=True, timeout=cfg["HTTP_TIMEOUT"])
    except requests.RequestException as e:
        logger.error("Could not fetch icon for %s: %s", app_id, e)
        return None

    with r:
        if not r.ok:
            logger.error("Could not fetch icon for %s (HTTP %s): %s", app_id, r.status_code, r.text)
            return None
        dest = workdir / f"{icon_hash}.ico"
        # "x": refuse to clobber a file someone else already wrote
        try:
            with open(dest, "xb") as fh:
                for chunk in r.iter_content(chunk_size=CHUNK):
                    fh.write(chunk)
        except requests.RequestException as e:
            logger.error("Icon download for %s broke off: %s", app_id, e)
            return None
    return dest

# ──────────────────────────────────────────────────────────────────────────────
# Extract / select
# ──────────────────────────────────────────────────────────────────────────────

def parse_candidate(p: Path) -> Optional[IconCandidate]:
    m = SIZE_RE.search(p.name)
    if not m:
        return None
    w, h, d = (int(g) for g in m.groups())
    return IconCandidate(path=p, width=w, height=h, bitdepth=d)

def extract_icons(src: Path, dest: Path, cfg: dict) -> List[IconCandidate]:
    dest.mkdir(parents=True, exist_ok=True)
    argv = [cfg["ICOTOOL"], "-x", str(src), "-o", f"{dest}/"]
    try:
        proc = subprocess.run(argv, capture_output=True, text=True, errors="replace")
    except OSError as e:
        logger.error("Could not extract icon sizes from %s: %s", src, e)
        return []
    if proc.returncode != 0:
        logger.error("Could not extract icon sizes from %s! %s", src, (proc.stderr or "").strip())
        return []

    found: List[IconCandidate] = []
    for p in sorted(dest.iterdir()):
        if not p.is_file():
            continue
        c = parse_candidate(p)
        if c is not None:
            found.append(c)
    return found

def select_candidates(candidates: List[IconCandidate]) -> List[IconCandidate]:
    """Square images at the deepest bit depth present; everything else is dropped."""
    if not candidates:
        return []
    best_depth = max(c.bitdepth for c in candidates)
    return [c for c in candidates if c.square and c.bitdepth == best_depth]

def _size_matches(c: IconCandidate) -> bool:
    try:
        with Image.open(c.path) as im:
            return im.size == (c.width, c.height)
    except (OSError, ValueError) as e:
        logger.warning("Unreadable icon image %s: %s", c.path.name, e)
        return False

# ──────────────────────────────────────────────────────────────────────────────
# Install
# ──────────────────────────────────────────────────────────────────────────────

def _place_file(src: Path, target: Path) -> None:
    """Copy next to target, then rename over it; target never exists half-written."""
    fd, tmp = tempfile.mkstemp(dir=target.parent, prefix=f".{target.stem}-", suffix=".part")
    os.close(fd)
    try:
        shutil.copyfile(src, tmp)
        os.chmod(tmp, 0o644)
        os.replace(tmp, target)
    except OSError:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise

def install_candidates(candidates: List[IconCandidate], icon_name: str, theme_dir: Path) -> bool:
    """
    Copy each selected image to <theme_dir>/<W>x<H>/apps/<icon_name>.png.
    Size directories the theme doesn't have are skipped, never created.
    An icon already in place counts as installed.
    """
    ok = False
    for c in select_candidates(candidates):
        apps_dir = theme_dir / c.size_dir / "apps"
        if not apps_dir.is_dir():
            logger.debug("No %s in icon theme, skipping %s", c.size_dir, c.path.name)
            continue
        target = apps_dir / f"{icon_name}.png"
        if target.exists():
            ok = True
            continue
        if not _size_matches(c):
            logger.warning("Skipping %s: image is not %s", c.path.name, c.size_dir)
            continue
        try:
            _place_file(c.path, target)
        except OSError as e:
            logger.error("Could not install %s: %s", target, e)
            continue
        logger.info("Installed icon %s", target)
        ok = True
    return ok

def install_icon(app_id: str, cfg: dict, workdir: Path) -> bool:
    icon_name = cfg["ICON_NAME_FMT"].format(app_id=app_id)
    try:
        ico = download_icon(app_id, cfg, workdir)
        if ico is None:
            return False
        candidates = extract_icons(ico, workdir / "sizes", cfg)
        return install_candidates(candidates, icon_name, cfg["ICON_THEME_DIR"])
    except OSError as e:
        logger.error("Icon install for %s failed: %s", app_id, e)
        return False
