# dakarmarket/blueprints/messages.py
from flask import Blueprint, jsonify, request

from ..services.message_service import MessageService
from ..services.profile_service import ProfileService
from ..session import require_session
from .serializers import message_to_dict, profile_to_dict, thread_to_dict

bp = Blueprint("messages", __name__)


@bp.get("/threads")
@require_session
def list_threads(actor):
    threads = MessageService.list_threads(actor.user_id)
    return jsonify({"threads": [thread_to_dict(t) for t in threads], "total": len(threads)})


@bp.get("/unread")
@require_session
def unread(actor):
    return jsonify({"unread": MessageService.unread_count(actor.user_id)})


@bp.get("/<counterpart_id>")
@require_session
def conversation(counterpart_id: str, actor):
    counterpart = ProfileService.get(counterpart_id)
    items = MessageService.get_conversation(actor.user_id, counterpart_id)
    return jsonify({
        "counterpart": profile_to_dict(counterpart),
        "messages": [message_to_dict(m) for m in items],
    })


@bp.post("/<counterpart_id>")
@require_session
def send(counterpart_id: str, actor):
    data = request.get_json(silent=True) or {}
    m = MessageService.send(actor.user_id, counterpart_id, data.get("content") or "")
    return jsonify(message_to_dict(m)), 201


@bp.post("/<counterpart_id>/read")
@require_session
def mark_read(counterpart_id: str, actor):
    return jsonify({"updated": MessageService.mark_read(counterpart_id, actor.user_id)})
