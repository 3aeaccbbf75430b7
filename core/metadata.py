import re
from pathlib import Path

SERVICE_NAME = "geometr-landing"
APP_TITLE = "Geometr: дашборд точек общепита"


def _read_version() -> str:
    changelog = Path(__file__).resolve().parent.parent / "CHANGELOG.md"
    if changelog.exists():
        match = re.search(r"##\s*\[(.+?)\]", changelog.read_text(encoding="utf-8"))
        if match:
            return match.group(1)
    return "unknown"


VERSION = _read_version()
