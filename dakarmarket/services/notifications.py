"""
Notificações de eventos (novo pedido, mudança de status, nova mensagem).

São apenas avisos para o front recarregar a tela: quem perde um aviso
converge recarregando. Por isso um assinante com erro é registrado no log
e ignorado, sem afetar a operação que publicou o evento.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

import requests
from flask import current_app

logger = logging.getLogger(__name__)

ORDER_CREATED = "order.created"
ORDER_STATUS_CHANGED = "order.status_changed"
MESSAGE_CREATED = "message.created"

EXTENSION_KEY = "dakarmarket.notifier"

Callback = Callable[[str, Dict[str, Any]], None]


class Notifier:
    """Registro de assinantes por evento; uma instância por app"""

    def __init__(self):
        self._subscribers: Dict[str, List[Callback]] = defaultdict(list)

    def subscribe(self, event: str, callback: Callback) -> None:
        self._subscribers[event].append(callback)

    def subscribe_all(self, callback: Callback) -> None:
        for event in (ORDER_CREATED, ORDER_STATUS_CHANGED, MESSAGE_CREATED):
            self.subscribe(event, callback)

    def publish(self, event: str, payload: Dict[str, Any]) -> int:
        """Entrega o evento; retorna quantos assinantes receberam sem erro."""
        delivered = 0
        for callback in list(self._subscribers.get(event, ())):
            try:
                callback(event, payload)
                delivered += 1
            except Exception as e:
                logger.error(f"Falha ao notificar {event}: {e}")
                continue
        return delivered


class WebhookSubscriber:
    """Repassa eventos via POST JSON para uma URL externa."""

    def __init__(self, url: str, timeout: float = 5.0, session: requests.Session = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def __call__(self, event: str, payload: Dict[str, Any]) -> None:
        response = self.session.post(
            self.url,
            json={"event": event, "payload": payload},
            timeout=self.timeout,
        )
        response.raise_for_status()
        logger.info(f"Webhook {event} entregue ({response.status_code})")


def init_notifier(app) -> Notifier:
    notifier = Notifier()
    url = app.config.get("NOTIFY_WEBHOOK_URL")
    if url:
        notifier.subscribe_all(WebhookSubscriber(url, timeout=app.config.get("NOTIFY_WEBHOOK_TIMEOUT", 5.0)))
        logger.info(f"Webhook de notificações ativo: {url}")
    app.extensions[EXTENSION_KEY] = notifier
    return notifier


def get_notifier() -> Notifier:
    return current_app.extensions[EXTENSION_KEY]


def notify(event: str, payload: Dict[str, Any]) -> int:
    return get_notifier().publish(event, payload)
