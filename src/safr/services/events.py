"""
Publish-subscribe síncrono.

Los listeners se llaman inmediatamente después de cada mutación,
en orden de registro, sin batching ni deduplicación.
"""

from typing import Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger()

PayloadT = TypeVar("PayloadT")

Listener = Callable[[PayloadT], None]


class EventEmitter(Generic[PayloadT]):
    """Lista de listeners de un único tipo de evento."""

    def __init__(self, name: str = "event"):
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registra un listener.

        Returns:
            Función que lo desregistra
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self._listeners = [l for l in self._listeners if l is not listener]

        return unsubscribe

    def emit(self, payload: PayloadT) -> None:
        """
        Llama a todos los listeners en orden de registro.

        Un listener que falla se loguea y no corta a los siguientes:
        la mutación que dispara el evento ya quedó guardada.
        """
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception as e:
                logger.exception("Error en listener", event_name=self.name, error=str(e))
        logger.debug("Evento emitido", event_name=self.name, listeners=len(self._listeners))

    def __len__(self) -> int:
        return len(self._listeners)
