# dakarmarket/services/store.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..errors import StoreError
from ..models import db

logger = logging.getLogger(__name__)


def commit(action: str) -> None:
    """Confirma a sessão; em erro faz rollback e levanta StoreError."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Erro ao {action}: {e}")
        raise StoreError(f"Falha ao {action}") from e


def execute(action: str, statement):
    """Executa um UPDATE/DELETE em lote e confirma; erros viram StoreError."""
    try:
        result = db.session.execute(statement)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Erro ao {action}: {e}")
        raise StoreError(f"Falha ao {action}") from e
    return result
