"""Static stylesheet assets shipped with the package."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

RESET_CSS_FILE = "reset.css"
MAIN_CSS_FILE = "main.css"
BLOG_CSS_FILE = "blog.css"

CSS_FILES: tuple[str, ...] = (RESET_CSS_FILE, MAIN_CSS_FILE, BLOG_CSS_FILE)

_CSS_SOURCE_DIR = Path(__file__).parent / "css"


@dataclass
class AssetDirs:
    css_dir: Path


def copy_assets(dirs: AssetDirs) -> list[Path]:
    """Write the bundled stylesheets into ``dirs.css_dir`` and return their paths."""
    dirs.css_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name in CSS_FILES:
        target = dirs.css_dir / name
        target.write_text((_CSS_SOURCE_DIR / name).read_text(encoding="utf-8"), encoding="utf-8")
        logger.info("created %s", target)
        written.append(target)
    return written
