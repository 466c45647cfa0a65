"""JSON logging configuration for vault-signer."""

import logging
import os

from pythonjsonlogger import jsonlogger

LOG_LEVEL_ENV = "VAULT_SIGNER_LOG_LEVEL"


class SignerJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter emitting a short, fixed field set.

    Keeps timestamp, level, message, exc_info, funcName, lineno and the
    optional ``alias`` passed through ``extra`` for per-entry records.
    """

    allowed_fields = frozenset(
        {"timestamp", "level", "message", "exc_info", "funcName", "lineno", "alias"}
    )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        for key in [key for key in log_record if key not in self.allowed_fields]:
            log_record.pop(key)


def _resolve_level() -> int:
    """Return the level named by VAULT_SIGNER_LOG_LEVEL, defaulting to INFO."""
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _setup_logger() -> logging.Logger:
    logger = logging.getLogger("vault_signer")

    # Module reloads must not stack handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        SignerJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(_resolve_level())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


LOGGER = _setup_logger()
