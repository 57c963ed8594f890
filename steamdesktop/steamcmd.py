# steamdesktop/steamcmd.py
from __future__ import annotations

import logging
import os
import re
import signal
import subprocess
import threading
from typing import List, Optional

logger = logging.getLogger(__name__)

# app_info_print dumps KeyValues text, e.g.:   "clienticon"		"0f1e2d..."
CLIENTICON_RE = re.compile(r'^\s*"clienticon"\s+"([^"]+)"\s*$')

def _kill_group(proc) -> None:
    """SIGKILL steamcmd and everything it spawned (the wrapper script forks the real binary)."""
    logger.warning("SteamCMD timed out, killing process group %s", proc.pid)
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass  # already gone

def steamcmd_argv(steamcmd: str, app_id: str) -> List[str]:
    return [steamcmd, "+login", "anonymous", "+app_info_print", app_id, "+quit"]

def resolve_icon_hash(app_id: str, cfg: dict) -> Optional[str]:
    """
    Ask steamcmd (anonymous login) for the app's metadata and pull the
    "clienticon" hash out of its stdout.

    The first match wins, even if steamcmd exits nonzero afterwards.
    Never raises: any failure is logged and reported as None.
    """
    argv = steamcmd_argv(cfg["STEAMCMD"], app_id)
    try:
        proc = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            start_new_session=True,
        )
    except OSError as e:
        logger.warning("Could not use SteamCMD to get icon hash for %s: %s", app_id, e)
        return None

    watchdog = None
    timeout = cfg.get("STEAMCMD_TIMEOUT") or 0
    if timeout > 0:
        watchdog = threading.Timer(timeout, _kill_group, args=(proc,))
        watchdog.daemon = True
        watchdog.start()

    found: Optional[str] = None
    try:
        for line in proc.stdout:
            if found is None:
                m = CLIENTICON_RE.match(line)
                if m:
                    found = m.group(1)
            # keep draining so steamcmd can reach +quit
        code = proc.wait()
    finally:
        if watchdog is not None:
            watchdog.cancel()
        proc.stdout.close()

    if found:
        logger.info("Icon hash for %s: %s", app_id, found)
        return found
    if code:
        logger.warning("Could not use SteamCMD to get icon hash for %s (exit %s)", app_id, code)
    else:
        logger.warning("SteamCMD reported no client icon for %s", app_id)
    return None
