# inventory/config.py
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

# Project root can be overridden (tests, deployment)
BASE_DIR = Path(
    os.getenv("CARBON_INVENTORY_BASE_DIR", Path(__file__).resolve().parent.parent)
)


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Every field can be overridden through an environment variable:
    - CARBON_INVENTORY_DATA_DIR
    - CARBON_INVENTORY_ATTACHMENT_URL
    - CARBON_INVENTORY_DB_URL
    - CARBON_INVENTORY_YEAR
    - CARBON_INVENTORY_LOG_LEVEL
    - CARBON_INVENTORY_LOG_FILE
    """

    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("CARBON_INVENTORY_DATA_DIR", BASE_DIR / "data")
        )
    )
    attachment_base_url: str = field(
        default_factory=lambda: os.getenv(
            "CARBON_INVENTORY_ATTACHMENT_URL", "attachments/"
        )
    )
    database_url: str = field(
        default_factory=lambda: os.getenv(
            "CARBON_INVENTORY_DB_URL",
            f"sqlite:///{(BASE_DIR / 'data' / 'carbon_inventory.db').as_posix()}",
        )
    )
    inventory_year: int = field(
        default_factory=lambda: int(os.getenv("CARBON_INVENTORY_YEAR", "2024"))
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("CARBON_INVENTORY_LOG_LEVEL", "INFO")
    )
    log_file: str | None = field(
        default_factory=lambda: os.getenv("CARBON_INVENTORY_LOG_FILE") or None
    )

    def data_path(self, filename: str) -> Path:
        return self.data_dir / filename


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
