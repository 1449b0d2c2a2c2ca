"""Configuración de logging (stdlib).

Todos los módulos usan loggers `orderlink.<área>`; aquí solo se instala un
handler de consola sobre el logger raíz del proyecto. Llamarlo varias veces
no duplica handlers.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "orderlink"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_orderlink", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        handler._orderlink = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
