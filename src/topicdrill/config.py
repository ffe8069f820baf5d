"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .exporter import DEFAULT_EXPORT_FILENAME

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_DRAW_SIZE = 1


@dataclass(frozen=True)
class AppConfig:
    """Settings for one served practice page."""

    catalog_path: Path | None = None
    export_filename: str = DEFAULT_EXPORT_FILENAME
    draw_size: int = DEFAULT_DRAW_SIZE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def flask_settings(self) -> dict[str, object]:
        """Return settings copied into ``app.config``."""
        return {
            "TOPICDRILL_CATALOG_PATH": str(self.catalog_path) if self.catalog_path is not None else None,
            "TOPICDRILL_EXPORT_FILENAME": self.export_filename,
            "TOPICDRILL_DRAW_SIZE": self.draw_size,
        }
