from dataclasses import dataclass

from starlette.config import Config

from scripture_search.utils.corpus import FRONT_MATTER_LINES


@dataclass(frozen=True)
class Settings:
    corpus_source: str = "bom.txt"
    front_matter_lines: int = FRONT_MATTER_LINES
    cache_dir: str = ".cache"
    cache_ttl: float = 3600
    fetch_timeout: float = 30
    debug: bool = False


def get_settings(env_file=".env") -> Settings:
    """Read settings from the environment, falling back to `env_file`."""
    config = Config(env_file)
    return Settings(
        corpus_source=config("CORPUS_SOURCE", default="bom.txt"),
        front_matter_lines=config("FRONT_MATTER_LINES", cast=int, default=FRONT_MATTER_LINES),
        cache_dir=config("CACHE_DIR", default=".cache"),
        cache_ttl=config("CACHE_TTL", cast=float, default=3600),
        fetch_timeout=config("FETCH_TIMEOUT", cast=float, default=30),
        debug=config("DEBUG", cast=bool, default=False),
    )
