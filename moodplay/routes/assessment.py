"""Endpoints de la evaluación de ánimo: puntaje de enojo, emoción y sentimiento."""

from flask import Blueprint, g, jsonify, request

from ..src.anger import AngerDetectionEngine
from ..src.emotions import EmotionDetectionService
from ..src.signals import analyze_sentiment, parameters_from_payload


bp = Blueprint("assessment", __name__)


@bp.post("/score")
def anger_score():
    """Calcula el puntaje de enojo.

    Body: AngerParameters { textSentiment, voiceTone?, typingSpeed, clickIntensity,
    recentGameHistory?, timeOfDay, physiological? } o métricas { typing, clicks, sentiment, voice? }
    Respuesta: AngerScore { score, level, confidence, parameters, timestamp }
    """
    try:
        p = request.get_json(force=True) or {}
        params = parameters_from_payload(p)
        result = AngerDetectionEngine().calculate_anger_score(params)
        g.anger_level = result.level.value
        return jsonify(result.to_dict()), 200
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400


@bp.post("/emotion")
def emotion():
    try:
        p = request.get_json(force=True) or {}
        params = parameters_from_payload(p)
        result = EmotionDetectionService().detect_emotion(params)
        return jsonify(result.to_dict()), 200
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400


@bp.post("/sentiment")
def sentiment():
    """Body: { text: str } -> SentimentMetrics"""
    p = request.get_json(force=True) or {}
    text = p.get("text") if isinstance(p, dict) else None
    if not isinstance(text, str):
        return jsonify({"error": "text requerido"}), 400
    return jsonify(analyze_sentiment(text).to_dict()), 200
