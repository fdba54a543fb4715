"""Application paths configuration."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    db_path: Path
    config_path: Path

    @classmethod
    def default(cls) -> "AppPaths":
        home = Path.home()

        return cls(
            db_path=home / ".local" / "share" / "pagefeed" / "feed.db",
            config_path=Path("settings.yml"),
        )
