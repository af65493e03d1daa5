"""Motor de puntaje de enojo: combina señales normalizadas en un score 0-100.

Pesos por señal:
    texto 0.25, voz 0.20, tipeo 0.15, clicks 0.10, historial 0.15,
    hora del día 0.05, fisiológico 0.10 (opcional)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from . import normalizers
from .utils import as_number, clamp, first_value, format_instant, parse_instant, round_half_up, utcnow


logger = logging.getLogger(__name__)


class AngerLevel(str, Enum):
    CALM = "CALM"
    MILD = "MILD"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    EXTREME = "EXTREME"

    @classmethod
    def parse(cls, value: Any) -> "AngerLevel":
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise ValueError(f"nivel de enojo no soportado: {value}") from exc


WEIGHTS: Dict[str, float] = {
    "text_sentiment": 0.25,
    "voice_tone": 0.20,
    "typing_speed": 0.15,
    "click_intensity": 0.10,
    "recent_game_history": 0.15,
    "time_of_day": 0.05,
    "physiological": 0.10,
}

# Señales que siempre cuentan para la confianza
ALWAYS_PRESENT = ("text_sentiment", "typing_speed", "click_intensity", "recent_game_history", "time_of_day")
FULL_WEIGHT = sum(WEIGHTS.values())

RECOMMENDED_CATEGORIES: Dict[AngerLevel, List[str]] = {
    AngerLevel.CALM: ["Strategy", "Puzzle", "Building", "RPG", "Adventure"],
    AngerLevel.MILD: ["Adventure", "Racing", "Sports", "Simulation"],
    AngerLevel.MODERATE: ["Action", "Fighting", "Hack-n-Slash", "Racing"],
    AngerLevel.HIGH: ["Casual", "Relaxing", "Sandbox", "Music", "Walking Sim"],
    AngerLevel.EXTREME: ["Meditation", "Music", "Walking Sim", "Puzzle", "Relaxing"],
}
DEFAULT_RECOMMENDED = ["Casual", "Adventure"]

AVOID_CATEGORIES: Dict[AngerLevel, List[str]] = {
    AngerLevel.CALM: [],
    AngerLevel.MILD: ["Dark Souls-like", "Roguelike"],
    AngerLevel.MODERATE: ["Competitive Multiplayer", "PvP"],
    AngerLevel.HIGH: ["PvP", "Roguelike", "Competitive"],
    AngerLevel.EXTREME: ["All Competitive", "PvP", "Roguelike", "Dark Souls-like"],
}
DEFAULT_AVOID = ["Competitive"]


@dataclass(frozen=True)
class AngerParameters:
    text_sentiment: float
    voice_tone: float
    typing_speed: float
    click_intensity: float
    recent_game_history: float
    time_of_day: int
    physiological: Optional[float] = None

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "AngerParameters":
        if not isinstance(p, dict):
            raise ValueError("parameters debe ser un objeto")
        physiological = first_value(p, "physiological")
        return cls(
            text_sentiment=as_number(p, "textSentiment", "text_sentiment"),
            voice_tone=as_number(p, "voiceTone", "voice_tone", default=0.0),
            typing_speed=as_number(p, "typingSpeed", "typing_speed"),
            click_intensity=as_number(p, "clickIntensity", "click_intensity"),
            recent_game_history=as_number(p, "recentGameHistory", "recent_game_history", default=0.0),
            time_of_day=int(as_number(p, "timeOfDay", "time_of_day")),
            physiological=None if physiological is None else as_number(p, "physiological"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "textSentiment": self.text_sentiment,
            "voiceTone": self.voice_tone,
            "typingSpeed": self.typing_speed,
            "clickIntensity": self.click_intensity,
            "recentGameHistory": self.recent_game_history,
            "timeOfDay": self.time_of_day,
            "physiological": self.physiological,
        }


@dataclass(frozen=True)
class AngerScore:
    score: int
    level: AngerLevel
    confidence: float
    parameters: AngerParameters
    timestamp: datetime = field(default_factory=utcnow)

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "AngerScore":
        if not isinstance(p, dict):
            raise ValueError("score debe ser un objeto")
        score = round_half_up(clamp(as_number(p, "score")))
        level = get_anger_level(score)
        sent_level = first_value(p, "level")
        if sent_level and AngerLevel.parse(sent_level) != level:
            raise ValueError(f"level {sent_level} no corresponde a score {score} ({level.value})")
        params = first_value(p, "parameters")
        return cls(
            score=score,
            level=level,
            confidence=clamp(as_number(p, "confidence", default=0.0), 0.0, 1.0),
            parameters=AngerParameters.from_dict(params) if params else _neutral_parameters(),
            timestamp=parse_instant(first_value(p, "timestamp")) or utcnow(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "confidence": self.confidence,
            "parameters": self.parameters.to_dict(),
            "timestamp": format_instant(self.timestamp),
        }


def _neutral_parameters() -> AngerParameters:
    return AngerParameters(
        text_sentiment=0.0,
        voice_tone=0.0,
        typing_speed=normalizers.BASELINE_WPM,
        click_intensity=0.0,
        recent_game_history=0.0,
        time_of_day=12,
    )


def get_anger_level(score: float) -> AngerLevel:
    if score <= 20:
        return AngerLevel.CALM
    if score <= 40:
        return AngerLevel.MILD
    if score <= 60:
        return AngerLevel.MODERATE
    if score <= 80:
        return AngerLevel.HIGH
    return AngerLevel.EXTREME


class AngerDetectionEngine:
    """Calcula el puntaje de enojo ponderado a partir de AngerParameters.

    No guarda estado entre llamadas; el reloj es inyectable para pruebas.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utcnow

    def calculate_anger_score(self, parameters: AngerParameters) -> AngerScore:
        contributions = {
            "text_sentiment": normalizers.normalize_text_sentiment(parameters.text_sentiment),
            "voice_tone": normalizers.normalize_voice_tone(parameters.voice_tone),
            "typing_speed": normalizers.normalize_typing_speed(parameters.typing_speed),
            "click_intensity": normalizers.normalize_click_intensity(parameters.click_intensity),
            "recent_game_history": normalizers.normalize_game_history(parameters.recent_game_history),
            "time_of_day": normalizers.normalize_time_of_day(parameters.time_of_day),
        }
        if parameters.physiological is not None:
            contributions["physiological"] = normalizers.normalize_physiological(parameters.physiological)

        weighted = sum(value * WEIGHTS[name] for name, value in contributions.items())
        score = round_half_up(clamp(weighted))
        result = AngerScore(
            score=score,
            level=get_anger_level(score),
            confidence=self.calculate_confidence(parameters),
            parameters=parameters,
            timestamp=self._clock(),
        )
        logger.debug("anger score=%d level=%s weighted=%.3f confidence=%.3f",
                     result.score, result.level.value, weighted, result.confidence)
        return result

    @staticmethod
    def calculate_confidence(parameters: AngerParameters) -> float:
        names = set(ALWAYS_PRESENT)
        if parameters.voice_tone > 0:
            names.add("voice_tone")
        if parameters.physiological is not None:
            names.add("physiological")
        present = sum(weight for name, weight in WEIGHTS.items() if name in names)
        return min(1.0, present / FULL_WEIGHT)

    @staticmethod
    def get_recommended_categories(level: AngerLevel) -> List[str]:
        return list(RECOMMENDED_CATEGORIES.get(level, DEFAULT_RECOMMENDED))

    @staticmethod
    def get_avoid_categories(level: AngerLevel) -> List[str]:
        return list(AVOID_CATEGORIES.get(level, DEFAULT_AVOID))
