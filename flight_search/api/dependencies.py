from functools import lru_cache

from flight_search.core.config import AmadeusSettings


@lru_cache(maxsize=1)
def get_settings() -> AmadeusSettings:
    return AmadeusSettings.from_env()
