"""Configuration and constants for portfoliocms."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "portfolio.db"

# Site registry path
SITE_JSON_PATH = PROJECT_ROOT / "site.json"

# Content item types
CONTENT_TYPES = ["article", "image", "video", "audio"]

# Downloadable file slots (one row each)
DOWNLOAD_FILE_TYPES = {
    "resume_full": "Full Resume",
    "resume_condensed": "Condensed Resume",
    "portfolio": "Portfolio",
}

DEFAULT_SITE_NAME = "Portfolio"


@dataclass
class SiteConfig:
    """Configuration for one portfolio site."""

    name: str = DEFAULT_SITE_NAME
    tagline: str = ""
    db_path: Path = field(default_factory=lambda: DEFAULT_DB_PATH)

    @property
    def exports_dir(self) -> Path:
        return self.db_path.parent / "exports"

    def ensure_dirs(self):
        """Create the data directory if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)


def _load_registry() -> dict:
    """Load the site.json registry file."""
    if SITE_JSON_PATH.exists():
        return json.loads(SITE_JSON_PATH.read_text())
    return {}


def _save_registry(registry: dict):
    """Save the site.json registry file."""
    SITE_JSON_PATH.write_text(json.dumps(registry, indent=2) + "\n")


def load_site_config() -> SiteConfig:
    """Load the site config, falling back to defaults when site.json is absent."""
    registry = _load_registry()

    db_path = DEFAULT_DB_PATH
    if registry.get("db_path"):
        db_path = Path(registry["db_path"])
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path

    return SiteConfig(
        name=registry.get("name", DEFAULT_SITE_NAME),
        tagline=registry.get("tagline", ""),
        db_path=db_path,
    )


def save_site_config(config: SiteConfig):
    """Write a site config back to site.json."""
    try:
        db_path = str(config.db_path.relative_to(PROJECT_ROOT))
    except ValueError:
        db_path = str(config.db_path)

    _save_registry({
        "name": config.name,
        "tagline": config.tagline,
        "db_path": db_path,
    })


def update_site_config(name: str | None = None, tagline: str | None = None) -> SiteConfig:
    """Update the site name and/or tagline in site.json."""
    config = load_site_config()
    if name is not None:
        if not name.strip():
            raise ValueError("Site name cannot be empty")
        config.name = name.strip()
    if tagline is not None:
        config.tagline = tagline.strip()
    save_site_config(config)
    return config
