from __future__ import annotations
import io
import sys
from pathlib import Path

import pytest

# Ensure project root import (app.py lives there)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from steamdesktop import create_config


def touch(p: Path, data: bytes = b"") -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data or b"stub")
    return p


def png(w=32, h=32) -> bytes:
    from PIL import Image
    buf = io.BytesIO()
    Image.new("RGBA", (w, h), (12, 34, 56, 255)).save(buf, format="PNG")
    return buf.getvalue()


def add_game(common: Path, name: str, app_id) -> Path:
    game = common / name
    game.mkdir(parents=True)
    if app_id is not None:
        (game / "steam_appid.txt").write_text(f"{app_id}\n", encoding="utf-8")
    return game


@pytest.fixture
def home(tmp_path, monkeypatch):
    h = tmp_path / "home"
    h.mkdir()
    monkeypatch.setenv("HOME", str(h))
    for var in ("STEAMDESKTOP_APPLICATIONS_DIR", "STEAMDESKTOP_ICON_THEME_DIR",
                "STEAMDESKTOP_SETTINGS", "STEAMDESKTOP_WORKERS"):
        monkeypatch.delenv(var, raising=False)
    return h


@pytest.fixture
def library(tmp_path):
    lib = tmp_path / "SteamLibrary"
    (lib / "steamapps" / "common").mkdir(parents=True)
    return lib


@pytest.fixture
def cfg(home, library):
    c = create_config(str(library))
    c["STEAMCMD_TIMEOUT"] = 0
    return c
