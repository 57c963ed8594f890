#!/usr/bin/env python3
import logging
import os
import sys
from steamdesktop import create_config, ensure_root
from steamdesktop.desktop import create_all_desktops
from steamdesktop.utils import tool_available

logger = logging.getLogger("steamdesktop")

def _setup_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("STEAMDESKTOP_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

def _resolve_library_root(argv) -> str:
    if len(argv) < 2:
        logger.error("No path provided")
        raise SystemExit(1)
    return os.path.abspath(os.path.normpath(argv[1]))

def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    _setup_logging()
    library_root = _resolve_library_root(argv)
    ensure_root(library_root)
    cfg = create_config(library_root)

    for tool in (cfg["STEAMCMD"], cfg["ICOTOOL"]):
        if not tool_available(tool):
            logger.warning("%s not found on PATH; games will get the '%s' icon",
                           tool, cfg["FALLBACK_ICON"])

    create_all_desktops(cfg)
    return 0

if __name__ == "__main__":
    sys.exit(main())
