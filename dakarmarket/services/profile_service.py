# dakarmarket/services/profile_service.py
import logging
from typing import Any, Dict

from ..errors import NotFoundError, ValidationError
from ..models import db, Profile, Role
from .store import commit

logger = logging.getLogger(__name__)

# role fica de fora: é definido no cadastro e não muda
EDITABLE_FIELDS = ("display_name", "avatar_url", "phone", "whatsapp_number")


class ProfileService:

    @staticmethod
    def create(data: Dict[str, Any]) -> Profile:
        """Espelha o perfil criado no cadastro do provedor de autenticação."""
        email = (data.get("email") or "").strip().lower()
        if not email:
            raise ValidationError("Campo obrigatório: email")
        try:
            role = Role((data.get("role") or Role.CLIENT.value).strip().lower())
        except ValueError:
            raise ValidationError("Papel inválido: use client ou merchant") from None
        if Profile.query.filter_by(email=email).first():
            raise ValidationError("email já cadastrado")

        profile = Profile(email=email, role=role.value)
        if data.get("id"):
            profile.id = str(data["id"]).strip()
            if db.session.get(Profile, profile.id):
                raise ValidationError("Perfil já existe")
        for field in EDITABLE_FIELDS:
            if field in data:
                setattr(profile, field, (data[field] or "").strip() or None)

        db.session.add(profile)
        commit("criar perfil")
        logger.info(f"Perfil {profile.id} criado ({role.value})")
        return profile

    @staticmethod
    def get(profile_id: str) -> Profile:
        profile = db.session.get(Profile, profile_id)
        if profile is None:
            raise NotFoundError(f"Perfil {profile_id} não encontrado")
        return profile

    @staticmethod
    def update(profile: Profile, data: Dict[str, Any]) -> Profile:
        if "role" in data and data["role"] != profile.role:
            raise ValidationError("O papel não pode ser alterado")
        for field in EDITABLE_FIELDS:
            if field in data:
                setattr(profile, field, (data[field] or "").strip() or None)
        commit("atualizar perfil")
        return profile
