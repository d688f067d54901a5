import copy
import logging.config

from .consts import LOG_FILE_DEFAULT
from .utils import canonicalify, ensure_path

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": logging.DEBUG,
            "formatter": "default",
            "filename": LOG_FILE_DEFAULT,
            "maxBytes": 5 * 1024 * 1024,  # 5MB
            "backupCount": 10,
        },
    },
    "loggers": {
        "quire": {
            "handlers": ["console", "file"],
            "level": logging.DEBUG,
            "propagate": True,
        }
    },
}


def setup(logfile=None, debug=False):
    """Configure the ``quire`` logger. ``debug`` lowers the console level."""
    config = copy.deepcopy(LOGGING_CONFIG)

    p = canonicalify(logfile or LOG_FILE_DEFAULT)
    ensure_path(p.parent)
    config["handlers"]["file"]["filename"] = str(p)

    if debug:
        config["handlers"]["console"]["level"] = logging.DEBUG

    logging.config.dictConfig(config)


logger = logging.getLogger("quire")
