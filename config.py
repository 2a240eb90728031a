from pathlib import Path
import os

MAX_DEPTH_ENV = "CODESLIDES_MAX_DEPTH"
TEMPLATE_DIR_ENV = "CODESLIDES_TEMPLATE_DIR"
IGNORE_ENV = "CODESLIDES_IGNORE"
LOG_LEVEL_ENV = "CODESLIDES_LOG_LEVEL"

CONTENT_FILE = "presentation-content.json"
HTML_FILE = "code-presentation.html"
OUTPUT_DIR_NAME = "presentation"
META_KEY = "__META__"
DEFAULT_TITLE = "Project Explorer"
DEFAULT_MAX_DEPTH = 5


def get_max_depth() -> int:
    """
    Default depth limit for the scanner.

    Priority:
    - CODESLIDES_MAX_DEPTH when set
    - DEFAULT_MAX_DEPTH
    """
    env_value = os.getenv(MAX_DEPTH_ENV)
    if env_value:
        return int(env_value)
    return DEFAULT_MAX_DEPTH


def get_extra_ignores() -> list[str]:
    raw = os.getenv(IGNORE_ENV, "")
    return [name.strip() for name in raw.split(",") if name.strip()]


def get_template_dir() -> Path | None:
    env_value = os.getenv(TEMPLATE_DIR_ENV)
    return Path(env_value).expanduser() if env_value else None


def get_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "WARNING")
