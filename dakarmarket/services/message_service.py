"""
Serviço de mensagens diretas entre cliente e lojista
"""

import logging
from typing import List

from sqlalchemy import and_, func, or_, select, update

from ..errors import NotFoundError, ValidationError
from ..models import db, Message, Profile
from . import notifications
from .store import commit, execute
from .threads import ThreadSummary, build_threads, counterpart_of

logger = logging.getLogger(__name__)


class MessageService:

    @staticmethod
    def send(from_id: str, to_id: str, content: str) -> Message:
        """Envia uma mensagem; conteúdo vazio ou só espaços é recusado."""
        text = (content or "").strip()
        if not text:
            raise ValidationError("A mensagem não pode estar vazia")
        if from_id == to_id:
            raise ValidationError("Não é possível enviar mensagem para si mesmo")
        if db.session.get(Profile, to_id) is None:
            raise NotFoundError(f"Destinatário {to_id} não encontrado")

        message = Message(from_user=from_id, to_user=to_id, content=text, read=False)
        db.session.add(message)
        commit("enviar mensagem")
        logger.info(f"Mensagem {message.id}: {from_id} -> {to_id}")

        notifications.notify(notifications.MESSAGE_CREATED, {
            "message_id": message.id,
            "from_user": from_id,
            "to_user": to_id,
        })
        return message

    @staticmethod
    def get_conversation(user_a: str, user_b: str) -> List[Message]:
        return (
            Message.query.filter(or_(
                and_(Message.from_user == user_a, Message.to_user == user_b),
                and_(Message.from_user == user_b, Message.to_user == user_a),
            ))
            .order_by(Message.created_at.asc())
            .all()
        )

    @staticmethod
    def mark_read(counterpart_id: str, self_id: str) -> int:
        """Marca como lidas as mensagens recebidas do interlocutor. Idempotente."""
        result = execute(
            "marcar mensagens como lidas",
            update(Message)
            .where(
                Message.from_user == counterpart_id,
                Message.to_user == self_id,
                Message.read.is_(False),
            )
            .values(read=True)
            .execution_options(synchronize_session="fetch"),
        )
        return result.rowcount or 0

    @staticmethod
    def unread_count(user_id: str) -> int:
        return db.session.scalar(
            select(func.count()).select_from(Message).where(
                Message.to_user == user_id,
                Message.read.is_(False),
            )
        ) or 0

    @staticmethod
    def list_threads(user_id: str) -> List[ThreadSummary]:
        messages = (
            Message.query.filter(or_(Message.from_user == user_id, Message.to_user == user_id))
            .order_by(Message.created_at.desc())
            .all()
        )
        ids = {counterpart_of(m, user_id) for m in messages}
        profiles = {p.id: p for p in Profile.query.filter(Profile.id.in_(ids)).all()} if ids else {}
        return build_threads(user_id, messages, profiles)
