# terminalscreener/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass
class Settings:
    # Core
    PORT: int = 8080
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"
    STATIC_DIR: str = "."

    # X.com API
    X_BEARER_TOKEN: str = ""
    X_API_BASE: str = "https://api.twitter.com"
    X_MENTIONS_MODE: str = "search"  # "search" counts posts, "counts" sums hourly buckets
    X_HTTP_TIMEOUT: float = 10.0
    X_REQUEST_DELAY_SECONDS: float = 3.0

    # Request shaping
    MAX_SYMBOLS_PER_REQUEST: int = 8
    DEFAULT_SYMBOLS: str = "BTC,ETH,PEPE,SHIB,SOL"

    # Rate budget
    RATE_LIMIT_MAX_REQUESTS: int = 25
    RATE_LIMIT_COOLDOWN_MINUTES: int = 15

    # Cache + history
    CACHE_TTL_MINUTES: int = 10
    HISTORY_MAX_DAYS: int = 7

    # Policies
    FAILED_SYMBOL_POLICY: str = "omit"  # "omit" | "fallback"
    TREND_FALLBACK: str = "random"  # "random" | "neutral"

    @property
    def x_configured(self) -> bool:
        return bool(self.X_BEARER_TOKEN)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            PORT=_env_int("PORT", 8080),
            HOST=os.getenv("HOST", "0.0.0.0"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
            STATIC_DIR=os.getenv("STATIC_DIR", os.getcwd()),
            X_BEARER_TOKEN=os.getenv("X_BEARER_TOKEN", "").strip(),
            X_API_BASE=os.getenv("X_API_BASE", "https://api.twitter.com").rstrip("/"),
            X_MENTIONS_MODE=os.getenv("X_MENTIONS_MODE", "search").strip().lower(),
            X_HTTP_TIMEOUT=_env_float("X_HTTP_TIMEOUT", 10.0),
            X_REQUEST_DELAY_SECONDS=_env_float("X_REQUEST_DELAY_SECONDS", 3.0),
            MAX_SYMBOLS_PER_REQUEST=_env_int("MAX_SYMBOLS_PER_REQUEST", 8),
            DEFAULT_SYMBOLS=os.getenv("DEFAULT_SYMBOLS", "BTC,ETH,PEPE,SHIB,SOL"),
            RATE_LIMIT_MAX_REQUESTS=_env_int("RATE_LIMIT_MAX_REQUESTS", 25),
            RATE_LIMIT_COOLDOWN_MINUTES=_env_int("RATE_LIMIT_COOLDOWN_MINUTES", 15),
            CACHE_TTL_MINUTES=_env_int("CACHE_TTL_MINUTES", 10),
            HISTORY_MAX_DAYS=_env_int("HISTORY_MAX_DAYS", 7),
            FAILED_SYMBOL_POLICY=os.getenv("FAILED_SYMBOL_POLICY", "omit").strip().lower(),
            TREND_FALLBACK=os.getenv("TREND_FALLBACK", "random").strip().lower(),
        )


settings = Settings.from_env()
