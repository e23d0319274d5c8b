# server_config.py
# ---------------------------------------------------
# Load server config from an external properties file
# ---------------------------------------------------
import os
from dataclasses import dataclass

from validation import DEFAULT_COURSES, STUDENT_ID_MAX, STUDENT_ID_MIN

DEFAULT_CONFIG_FILE = "server.properties"


class ConfigError(Exception):
    """Raised when the properties file is malformed or holds bad values."""


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    courses: tuple = DEFAULT_COURSES
    student_id_min: int = STUDENT_ID_MIN
    student_id_max: int = STUDENT_ID_MAX
    add_delay_seconds: float = 5.0
    log_level: str = "INFO"


def load_properties(filename):
    """Parse `key=value` lines; blank lines and `#` comments are skipped."""
    cfg = {}
    with open(filename, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                raise ConfigError(f"{filename}:{lineno}: expected key=value, got {line!r}")
            key, value = line.split("=", 1)
            cfg[key.strip()] = value.strip()
    return cfg


def _as_int(props, key, default):
    raw = props.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _as_float(props, key, default):
    raw = props.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None


def config_from_properties(props) -> ServerConfig:
    courses = DEFAULT_COURSES
    if "COURSES" in props:
        courses = tuple(c.strip() for c in props["COURSES"].split(",") if c.strip())
        if not courses:
            raise ConfigError("COURSES must name at least one course")

    cfg = ServerConfig(
        host=props.get("HOST") or ServerConfig.host,
        port=_as_int(props, "PORT", ServerConfig.port),
        courses=courses,
        student_id_min=_as_int(props, "STUDENT_ID_MIN", STUDENT_ID_MIN),
        student_id_max=_as_int(props, "STUDENT_ID_MAX", STUDENT_ID_MAX),
        add_delay_seconds=_as_float(props, "ADD_DELAY_SECONDS", ServerConfig.add_delay_seconds),
        log_level=os.environ.get("COURSEREG_LOG_LEVEL") or props.get("LOG_LEVEL") or ServerConfig.log_level,
    )
    if cfg.student_id_min >= cfg.student_id_max:
        raise ConfigError("STUDENT_ID_MIN must be below STUDENT_ID_MAX")
    if cfg.add_delay_seconds < 0:
        raise ConfigError("ADD_DELAY_SECONDS cannot be negative")
    return cfg


def load_server_config(filename=None) -> ServerConfig:
    """Load config from `filename` (or $COURSEREG_CONFIG, or server.properties).

    A missing default file just means defaults; a missing file that was
    asked for explicitly is an error.
    """
    explicit = filename is not None or "COURSEREG_CONFIG" in os.environ
    if filename is None:
        filename = os.environ.get("COURSEREG_CONFIG", DEFAULT_CONFIG_FILE)

    if not os.path.exists(filename):
        if explicit:
            raise ConfigError(f"config file not found: {filename}")
        return config_from_properties({})
    return config_from_properties(load_properties(filename))
