"""Endpoints del catálogo estático de juegos.

Exponen las búsquedas por nivel de enojo, al azar y por id, además de las
tablas de categorías recomendadas / a evitar.
"""

from flask import Blueprint, jsonify, request

from ..src.anger import AngerDetectionEngine, AngerLevel
from ..src.catalog import all_games, get_game_by_id, get_games_by_mood, get_random_games
from ..src.config import Config


bp = Blueprint("catalog", __name__)


@bp.get("/games")
def list_games():
    items = [g.to_dict() for g in all_games()]
    return jsonify({"items": items, "returned": len(items)}), 200


@bp.get("/games/<game_id>")
def game_detail(game_id: str):
    game = get_game_by_id(game_id)
    if game is None:
        return jsonify({"error": "juego no encontrado"}), 404
    return jsonify(game.to_dict()), 200


@bp.get("/mood/<level>")
def games_by_mood(level: str):
    """Juegos asociados a un nivel; niveles desconocidos devuelven los de CALM."""
    items = [g.to_dict() for g in get_games_by_mood(level)]
    return jsonify({"level": level.upper(), "items": items, "returned": len(items)}), 200


@bp.get("/random")
def random_games():
    try:
        count = int(request.args.get("count") or Config.RANDOM_GAMES_DEFAULT)
    except ValueError:
        return jsonify({"error": "count debe ser entero"}), 400
    items = [g.to_dict() for g in get_random_games(count)]
    return jsonify({"items": items, "returned": len(items)}), 200


@bp.get("/categories/<level>")
def categories(level: str):
    try:
        parsed = AngerLevel.parse(level)
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 404
    return jsonify({
        "level": parsed.value,
        "recommended": AngerDetectionEngine.get_recommended_categories(parsed),
        "avoid": AngerDetectionEngine.get_avoid_categories(parsed),
    }), 200
