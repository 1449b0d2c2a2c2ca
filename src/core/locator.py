"""Service locator: nombre simbólico -> instancia perezosa y cacheada.

Reglas:
- `register` guarda una factory; registrar de nuevo el mismo nombre la
  reemplaza y descarta la instancia cacheada.
- `get` invoca la factory como mucho una vez (pasándose a sí mismo, para que
  la factory resuelva sus dependencias por nombre) y memoriza el resultado.

No hay detección de ciclos: una factory que pide su propio nombre, directa o
transitivamente, recursa hasta `RecursionError`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from core.errors import ServiceNotFound

logger = logging.getLogger("orderlink.locator")

Factory = Callable[["ServiceLocator"], Any]


@dataclass
class ServiceRegistration:
    name: str
    factory: Factory
    instance: Any = None
    built: bool = False


class ServiceLocator:
    def __init__(self) -> None:
        self._registrations: dict[str, ServiceRegistration] = {}
        # Reentrante: las factories llaman a `get` durante su construcción.
        self._lock = threading.RLock()

    def register(self, name: str, factory: Factory) -> None:
        with self._lock:
            self._registrations[name] = ServiceRegistration(name=name, factory=factory)
        logger.debug("Registered service %s", name)

    def get(self, name: str) -> Any:
        with self._lock:
            registration = self._registrations.get(name)
            if registration is None:
                raise ServiceNotFound(name)
            if not registration.built:
                registration.instance = registration.factory(self)
                registration.built = True
                logger.debug("Built service %s", name)
            return registration.instance

    def is_registered(self, name: str) -> bool:
        return name in self._registrations

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def names(self) -> list[str]:
        return sorted(self._registrations)
