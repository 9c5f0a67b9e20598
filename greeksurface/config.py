import os
from dataclasses import dataclass
from functools import lru_cache

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    db_url: str = "sqlite:///./greeksurface.db"
    persist: bool = False
    log_level: str = "INFO"
    persist_target_points: int = 2000
    max_grid_nodes: int = 250_000


def load_settings(env=None) -> Settings:
    env = os.environ if env is None else env
    return Settings(
        db_url=env.get("DB_URL", Settings.db_url),
        persist=env.get("PERSIST", "0").strip().lower() in _TRUTHY,
        log_level=env.get("LOG_LEVEL", Settings.log_level),
        persist_target_points=int(env.get("PERSIST_TARGET_POINTS", Settings.persist_target_points)),
        max_grid_nodes=int(env.get("MAX_GRID_NODES", Settings.max_grid_nodes)),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
