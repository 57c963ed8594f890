import shutil
from pathlib import Path
from typing import Optional

def tool_available(name: str) -> bool:
    return shutil.which(name) is not None

def read_first_line(p: Path) -> str:
    text = p.read_text(encoding="utf-8-sig", errors="ignore")
    lines = text.splitlines()
    return lines[0].strip() if lines else ""

def parse_app_id(raw: str) -> Optional[str]:
    """Return the id if it is a plain run of digits, else None."""
    s = (raw or "").strip()
    return s if s.isascii() and s.isdigit() else None
