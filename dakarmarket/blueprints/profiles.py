# dakarmarket/blueprints/profiles.py
from flask import Blueprint, jsonify, request

from ..services.profile_service import ProfileService
from ..services.stats_service import StatsService
from ..session import require_session
from .serializers import profile_to_dict

bp = Blueprint("profiles", __name__)


@bp.post("/profiles")
def create_profile():
    data = request.get_json(silent=True) or {}
    p = ProfileService.create(data)
    return jsonify(profile_to_dict(p, private=True)), 201


@bp.get("/profiles/me")
@require_session
def get_me(actor):
    return jsonify(profile_to_dict(actor.profile, private=True))


@bp.put("/profiles/me")
@require_session
def update_me(actor):
    data = request.get_json(silent=True) or {}
    p = ProfileService.update(actor.profile, data)
    return jsonify(profile_to_dict(p, private=True))


@bp.get("/profiles/<profile_id>")
def get_profile(profile_id: str):
    return jsonify(profile_to_dict(ProfileService.get(profile_id)))


@bp.get("/dashboard/stats")
@require_session
def dashboard_stats(actor):
    return jsonify(StatsService.dashboard(actor.user_id, actor.role))
