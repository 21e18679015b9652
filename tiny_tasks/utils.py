import logging
import os
import re
import sys
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .errors import MalformedIdError

load_dotenv(find_dotenv())

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

# Whole numbers, optionally written with a zero fraction ("1.0").
ID_PATTERN = re.compile(r"[+-]?[0-9]+(?:\.0*)?")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    cors_origins: list[str]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            host=os.getenv("HOST") or DEFAULT_HOST,
            port=_env_int("PORT", DEFAULT_PORT),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Send every log record to stderr with one timestamped format.

    Existing root handlers are removed first so repeated calls do not
    duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)


def parse_id(raw_id: str) -> int:
    text = raw_id.strip()
    if not text.isascii() or not ID_PATTERN.fullmatch(text):
        raise MalformedIdError(raw_id)
    return int(text.partition(".")[0])
