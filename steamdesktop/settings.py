import json
import logging
from typing import Dict
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    "max_workers": 4,
    "http_timeout": 30,
    "steamcmd_timeout": 300,   # 0 = wait for steamcmd forever
    "icon_theme": "hicolor",
}

def load_settings(settings_file: Path) -> Dict:
    settings = dict(DEFAULTS)
    try:
        if settings_file.exists():
            data = json.loads(settings_file.read_text("utf-8"))
            settings.update({k: data.get(k, settings[k]) for k in settings})
    except (OSError, ValueError, AttributeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", settings_file, e)
    return settings
