from dataclasses import dataclass
import os

@dataclass(frozen=True)
class Settings:
    log_file: str = os.getenv("TEMPOGRAPH_LOG_FILE", "logs/tempograph.log")
    log_level: str = os.getenv("TEMPOGRAPH_LOG_LEVEL", "INFO")
    # 0 = never evict
    cache_max_entries: int = int(os.getenv("TEMPOGRAPH_CACHE_MAX_ENTRIES", "0"))
    # timestamp units per minute (epoch milliseconds by default)
    minute_units: float = float(os.getenv("TEMPOGRAPH_MINUTE_UNITS", "60000"))

SETTINGS = Settings()
