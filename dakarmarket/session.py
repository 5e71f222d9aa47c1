"""
Contexto de sessão por requisição.

A autenticação fica com o provedor externo: o front envia o id do usuário
autenticado em `X-User-Id` e aqui só resolvemos o perfil e o papel.
O contexto é montado a cada requisição e passado explicitamente às views
e aos serviços como `actor`.
"""

from dataclasses import dataclass
from functools import wraps

from flask import request

from .errors import AuthenticationError, ValidationError
from .models import db, Profile, Role

USER_HEADER = "X-User-Id"


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    role: Role
    profile: Profile


def load_session(user_id: str) -> SessionContext:
    user_id = (user_id or "").strip()
    if not user_id:
        raise AuthenticationError("Sessão ausente: cabeçalho X-User-Id obrigatório")
    profile = db.session.get(Profile, user_id)
    if profile is None:
        raise AuthenticationError("Perfil não encontrado para a sessão")
    return SessionContext(user_id=profile.id, role=Role(profile.role), profile=profile)


def current_session() -> SessionContext:
    return load_session(request.headers.get(USER_HEADER, ""))


def require_role(role: Role):
    """Decorator: exige sessão com o papel indicado e a injeta como `actor`."""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor = current_session()
            if actor.role is not role:
                raise ValidationError(f"Ação permitida apenas para o papel {role.value}")
            return view(*args, actor=actor, **kwargs)
        return wrapper
    return decorator


def require_session(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        return view(*args, actor=current_session(), **kwargs)
    return wrapper
