from logging import WARNING, config, getLevelName, getLogger

from src.config import get_settings

LOGGER_NAME = "api"
# httpx logs every request line at INFO, including ipstack's access_key query parameter.
UPSTREAM_LOGGER_NAMES = ("httpx", "httpcore")


def build_log_config(level: str) -> dict:
    """dictConfig for the service logger, uvicorn and the upstream HTTP client loggers."""
    log_level = getLevelName(level.upper())  # DEBUG, WARNING, ERROR
    upstream_level = max(log_level, WARNING) if isinstance(log_level, int) else WARNING

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
        },
        "handlers": {
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": log_level, "propagate": True},
            "uvicorn": {"handlers": ["default"], "level": log_level, "propagate": True},
            "uvicorn.access": {"handlers": ["access"], "level": log_level, "propagate": False},
            "uvicorn.error": {"level": log_level, "propagate": False},
            **{name: {"level": upstream_level, "propagate": True} for name in UPSTREAM_LOGGER_NAMES},
        },
    }


config.dictConfig(build_log_config(get_settings().log_level))

logger = getLogger(LOGGER_NAME)
