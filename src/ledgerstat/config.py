"""Environment-driven settings.

LEDGERSTAT_LEDGER and LEDGERSTAT_USER are read by the CLI options directly.
"""

import os
from functools import lru_cache
from typing import Optional

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings:
    def __init__(
        self,
        database_url: Optional[str],
        currency: str,
        log_level: str,
    ) -> None:
        self.database_url = database_url
        self.currency = currency
        self.log_level = log_level


def _log_level(value: Optional[str]) -> str:
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("LEDGERSTAT_DATABASE_URL") or None,
        currency=os.getenv("LEDGERSTAT_CURRENCY", "CAD").strip().upper() or "CAD",
        log_level=_log_level(os.getenv("LEDGERSTAT_LOG_LEVEL")),
    )
