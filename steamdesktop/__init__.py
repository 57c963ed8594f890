import logging
import os
from pathlib import Path

from .settings import load_settings, DEFAULTS

logger = logging.getLogger(__name__)

# Tool names can be overridden for non-standard installs
STEAMCMD = os.environ.get("STEAMCMD", "steamcmd")
ICOTOOL = os.environ.get("ICOTOOL", "icotool")
ICON_BASE_URL = "https://shared.fastly.steamstatic.com/community_assets/images/apps/"

def common_dir_for(library_root: str) -> Path:
    return Path(library_root) / "steamapps" / "common"

def ensure_root(library_root: str) -> None:
    if not os.path.isdir(library_root):
        raise SystemExit(f"Steam library does not exist: {library_root}")
    if not common_dir_for(library_root).is_dir():
        raise SystemExit(f"Invalid path, no steamapps/common under: {library_root}")

def _settings_file() -> Path:
    env = os.environ.get("STEAMDESKTOP_SETTINGS")
    if env:
        return Path(env)
    return Path.home() / ".config" / "steamdesktop" / "settings.json"

def _number(value, key: str, cast):
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("Bad %s value %r, using %s", key, value, DEFAULTS[key])
        return cast(DEFAULTS[key])

def create_config(library_root: str) -> dict:
    home = Path.home()
    settings = load_settings(_settings_file())
    workers = os.environ.get("STEAMDESKTOP_WORKERS") or settings["max_workers"]
    theme = settings["icon_theme"]
    if not isinstance(theme, str) or not theme:
        logger.warning("Bad icon_theme value %r, using %s", theme, DEFAULTS["icon_theme"])
        theme = DEFAULTS["icon_theme"]

    cfg = {}
    cfg["LIBRARY_ROOT"] = Path(library_root)
    cfg["COMMON_DIR"] = common_dir_for(library_root)
    cfg["MARKER_FILE"] = "steam_appid.txt"
    cfg["APPLICATIONS_DIR"] = Path(os.environ.get(
        "STEAMDESKTOP_APPLICATIONS_DIR",
        home / ".local" / "share" / "applications" / "steam"))
    cfg["ICON_THEME_DIR"] = Path(os.environ.get(
        "STEAMDESKTOP_ICON_THEME_DIR",
        home / ".local" / "share" / "icons" / theme))
    cfg["ICON_BASE_URL"] = ICON_BASE_URL
    cfg["ICON_NAME_FMT"] = "steam_icon_{app_id}"
    cfg["FALLBACK_ICON"] = "steam"
    cfg["STEAMCMD"] = STEAMCMD
    cfg["ICOTOOL"] = ICOTOOL
    cfg["MAX_WORKERS"] = max(1, _number(workers, "max_workers", int))
    cfg["HTTP_TIMEOUT"] = _number(settings["http_timeout"], "http_timeout", float)
    cfg["STEAMCMD_TIMEOUT"] = _number(settings["steamcmd_timeout"], "steamcmd_timeout", float)
    return cfg
