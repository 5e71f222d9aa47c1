"""
Agrupamento de mensagens em conversas (uma por interlocutor).
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class ThreadSummary:
    """Resumo de uma conversa: última mensagem e não lidas recebidas"""
    counterpart_id: str
    counterpart_profile: Optional[Any]
    last_message: Any
    unread_count: int


def counterpart_of(message, user_id: str) -> str:
    return message.from_user if message.to_user == user_id else message.to_user


def build_threads(user_id: str, messages: Iterable, profiles: Optional[Dict[str, Any]] = None) -> List[ThreadSummary]:
    """
    Agrupa as mensagens do usuário por interlocutor

    Args:
        user_id: usuário atual
        messages: todas as mensagens em que o usuário é remetente ou destinatário
        profiles: mapa opcional id -> perfil, para preencher counterpart_profile

    Returns:
        Conversas ordenadas pela mensagem mais recente de cada uma

    A entrada é reordenada da mais nova para a mais antiga antes da
    varredura; a primeira mensagem vista de cada interlocutor é a última da
    conversa. Empates de created_at mantêm a ordem recebida.
    """
    ordered = sorted(messages, key=lambda m: m.created_at, reverse=True)
    profiles = profiles or {}

    unread: Dict[str, int] = {}
    for m in ordered:
        if m.to_user == user_id and not m.read:
            unread[m.from_user] = unread.get(m.from_user, 0) + 1

    threads: Dict[str, ThreadSummary] = {}
    for m in ordered:
        other = counterpart_of(m, user_id)
        if other in threads:
            continue
        threads[other] = ThreadSummary(
            counterpart_id=other,
            counterpart_profile=profiles.get(other),
            last_message=m,
            unread_count=unread.get(other, 0),
        )
    return list(threads.values())
