from flask import Blueprint, jsonify
from ..src.config import Config
from ..src.catalog import GAME_DATABASE


bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "service": "moodplay",
        "debug": Config.DEBUG,
        "catalog_size": len(GAME_DATABASE),
        "suggestion_provider": Config.SUGGESTION_PROVIDER,
    }), 200
