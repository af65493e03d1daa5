import asyncio
from dataclasses import replace

from flask import Blueprint, g, jsonify, request
from typing import Optional

from ..src.anger import AngerDetectionEngine, AngerScore
from ..src.config import Config
from ..src.models import UserProfile
from ..src.providers.base import SuggestionProvider
from ..src.providers.mock import MockSuggestionProvider
from ..src.recommendation import RecommendationEngine
from ..src.signals import parameters_from_payload
from ..src.utils import first_value


bp = Blueprint("recommendations", __name__)


def _suggestion_provider(name: Optional[str] = None) -> SuggestionProvider:
    name = (name or Config.SUGGESTION_PROVIDER).lower()
    if name == "mock":
        return MockSuggestionProvider()
    raise ValueError(f"Proveedor de sugerencias {name} no soportado")


def _resolve_score(p: dict, profile: UserProfile, engine: AngerDetectionEngine) -> AngerScore:
    if isinstance(p.get("score"), dict):
        return AngerScore.from_dict(p["score"])
    raw = p.get("parameters")
    if isinstance(raw, dict):
        params = parameters_from_payload(raw)
        # sin historial explícito se cuentan los rage quits del perfil
        if first_value(raw, "recentGameHistory", "recent_game_history") is None:
            params = replace(params, recent_game_history=float(profile.rage_quit_count()))
        return engine.calculate_anger_score(params)
    raise ValueError("score o parameters requerido")


@bp.post("")
def recommend():
    """Recomienda juegos para el estado de ánimo actual.

    Body: { profile: UserProfile, score?: AngerScore, parameters?: AngerParameters, provider?: str }
    Respuesta: RecommendationResult { type, games, message, confidence, angerLevel, reasoning }

    Si parameters no trae recentGameHistory se usa la cantidad de rage quits
    registrados en profile.playHistory.
    """
    try:
        p = request.get_json(force=True) or {}
        if not isinstance(p, dict):
            return jsonify({"error": "body debe ser un objeto"}), 400
        profile = UserProfile.from_dict(p.get("profile") or {})
        anger_engine = AngerDetectionEngine()
        score = _resolve_score(p, profile, anger_engine)
        engine = RecommendationEngine(
            suggestion_provider=_suggestion_provider(p.get("provider")),
            anger_engine=anger_engine,
        )
        result = asyncio.run(engine.recommend_games(profile, score))
        g.anger_level = result.anger_level.value
        return jsonify(result.to_dict()), 200
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400
