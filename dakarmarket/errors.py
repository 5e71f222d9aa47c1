"""
Erros do domínio do marketplace.

Os serviços levantam estas exceções; o handler registrado em
`register_error_handlers` converte cada uma na resposta JSON padrão
`{"success": false, "message": ...}`. Nenhuma é fatal nem é repetida
automaticamente: o usuário refaz a ação.
"""

import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class MarketError(Exception):
    """Base de todos os erros que chegam à interface."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"success": False, "message": self.message, "error": type(self).__name__}


class ValidationError(MarketError):
    """Entrada inválida (mensagem vazia, transição proibida, papel errado...)."""
    status_code = 400


class AuthenticationError(MarketError):
    """Sessão ausente ou perfil desconhecido."""
    status_code = 401


class NotFoundError(MarketError):
    """Pedido, produto, perfil ou item referenciado não existe."""
    status_code = 404


class StoreError(MarketError):
    """Falha da camada de persistência (rede, permissão, banco)."""
    status_code = 503


class PartialFailureError(MarketError):
    """
    Operação em várias etapas em que as primeiras escritas foram
    confirmadas e uma etapa seguinte falhou (ex.: limpar o carrinho
    depois do checkout). `order_ids` lista os pedidos já criados.
    """
    status_code = 207

    def __init__(self, message: str, order_ids=None):
        super().__init__(message)
        self.order_ids = list(order_ids or [])

    def to_dict(self):
        return super().to_dict() | {"order_ids": self.order_ids}


def register_error_handlers(app):
    @app.errorhandler(MarketError)
    def _handle_market_error(err: MarketError):
        if err.status_code >= 500:
            logger.error(f"{type(err).__name__}: {err.message}")
        else:
            logger.info(f"{type(err).__name__}: {err.message}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(404)
    def _handle_not_found(_err):
        return jsonify({"success": False, "message": "Recurso não encontrado"}), 404
