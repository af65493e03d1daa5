"""Métricas de la evaluación (tipeo, clicks, sentimiento) a partir de medidas crudas.

El cliente captura eventos (teclas, clicks, texto libre) y envía las medidas;
aquí se resumen en los registros que consume AngerDetectionEngine.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .anger import AngerParameters
from .normalizers import BASELINE_WPM
from .utils import as_number, first_value


REFERENCE_TEXT = "The quick brown fox jumps over the lazy dog"
CLICK_WINDOW = 10

ANGER_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "high": (
        "furious", "rage", "hate", "destroy", "kill", "angry", "mad", "fuck", "shit",
        "terrible", "awful", "horrible", "disgusting", "stupid", "idiot", "moron",
    ),
    "medium": (
        "frustrated", "annoyed", "irritated", "upset", "disappointed", "worried",
        "stressed", "tired", "bored", "confused", "nervous", "anxious",
    ),
    "low": ("slightly", "kinda", "maybe", "perhaps", "possibly"),
}
KEYWORD_POINTS = {"high": 3, "medium": 2, "low": 1}

POSITIVE_KEYWORDS: Tuple[str, ...] = (
    "love", "great", "amazing", "wonderful", "fantastic", "excellent", "perfect",
    "happy", "joy", "pleasure", "enjoy", "fun", "exciting", "beautiful", "nice",
)


@dataclass(frozen=True)
class TypingMetrics:
    wpm: float
    accuracy: float = 100.0
    variance: float = 0.0
    baseline_deviation: float = 0.0

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "TypingMetrics":
        wpm = as_number(p, "wpm")
        return cls(
            wpm=wpm,
            accuracy=as_number(p, "accuracy", default=100.0),
            variance=as_number(p, "variance", default=0.0),
            baseline_deviation=as_number(p, "baselineDeviation", default=abs(wpm - BASELINE_WPM)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wpm": self.wpm,
            "accuracy": self.accuracy,
            "variance": self.variance,
            "baselineDeviation": self.baseline_deviation,
        }


@dataclass(frozen=True)
class ClickMetrics:
    intensity: float = 0.0
    frequency: float = 0.0
    pattern: str = "calm"
    total_clicks: int = 0
    average_intensity: float = 0.0

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "ClickMetrics":
        intensity = as_number(p, "intensity", default=0.0)
        return cls(
            intensity=intensity,
            frequency=as_number(p, "frequency", default=0.0),
            pattern=str(first_value(p, "pattern") or "normal"),
            total_clicks=int(as_number(p, "totalClicks", default=0.0)),
            average_intensity=as_number(p, "averageIntensity", default=intensity),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intensity": self.intensity,
            "frequency": self.frequency,
            "pattern": self.pattern,
            "totalClicks": self.total_clicks,
            "averageIntensity": self.average_intensity,
        }


@dataclass(frozen=True)
class SentimentMetrics:
    score: float = 0.0
    confidence: float = 0.0
    anger_level: str = "low"
    keywords: List[str] = field(default_factory=list)
    analysis: str = ""

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "SentimentMetrics":
        return cls(
            score=as_number(p, "score"),
            confidence=as_number(p, "confidence", default=0.0),
            anger_level=str(first_value(p, "angerLevel") or "low"),
            keywords=[str(k) for k in (p.get("keywords") or [])],
            analysis=str(p.get("analysis") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "confidence": self.confidence,
            "angerLevel": self.anger_level,
            "keywords": list(self.keywords),
            "analysis": self.analysis,
        }


# --- tipeo ---

def calculate_wpm(text: str, elapsed_ms: float) -> int:
    words = len(text.split())
    minutes = elapsed_ms / 60000
    return int(round(words / minutes)) if minutes > 0 else 0


def calculate_accuracy(reference: str, typed: str) -> float:
    if not reference:
        return 100.0
    errors = sum(1 for a, b in zip(reference, typed) if a != b)
    errors += abs(len(reference) - len(typed))
    return max(0.0, 100 - errors / len(reference) * 100)


def calculate_variance(history: Sequence[float]) -> float:
    """Desviación estándar poblacional de los WPM por palabra."""
    if len(history) < 2:
        return 0.0
    mean = sum(history) / len(history)
    return math.sqrt(sum((v - mean) ** 2 for v in history) / len(history))


def typing_metrics(text: str, elapsed_ms: float, word_wpms: Sequence[float] = (),
                   reference: str = REFERENCE_TEXT) -> TypingMetrics:
    wpm = calculate_wpm(text, elapsed_ms)
    return TypingMetrics(
        wpm=wpm,
        accuracy=calculate_accuracy(reference, text),
        variance=calculate_variance(word_wpms),
        baseline_deviation=abs(wpm - BASELINE_WPM),
    )


# --- clicks ---

def click_frequency(timestamps_ms: Sequence[float]) -> float:
    recent = list(timestamps_ms)[-CLICK_WINDOW:]
    if len(recent) < 2:
        return 0.0
    span = (recent[-1] - recent[0]) / 1000
    if span <= 0:
        return 0.0
    return round((len(recent) - 1) / span, 1)


def click_pattern(frequency: float, average_intensity: float) -> str:
    if frequency > 3 and average_intensity > 70:
        return "aggressive"
    if frequency > 2 and average_intensity > 60:
        return "erratic"
    if frequency < 1 and average_intensity < 40:
        return "calm"
    return "normal"


def click_metrics(samples: Sequence[Tuple[float, float]]) -> ClickMetrics:
    """samples: pares (timestamp_ms, intensidad 0-100) en orden de llegada."""
    if not samples:
        return ClickMetrics()
    intensities = [min(100.0, max(0.0, float(i))) for _, i in samples]
    frequency = click_frequency([t for t, _ in samples])
    average = round(sum(intensities) / len(intensities), 1)
    return ClickMetrics(
        intensity=intensities[-1],
        frequency=frequency,
        pattern=click_pattern(frequency, average),
        total_clicks=len(samples),
        average_intensity=average,
    )


# --- sentimiento (heurística por palabras clave, no NLP real) ---

def analyze_sentiment(text: str) -> SentimentMetrics:
    if not text or not text.strip():
        return SentimentMetrics(analysis="No text to analyze")

    words = [re.sub(r"[^\w]", "", w) for w in text.lower().split()]
    total = len(words)
    anger = 0
    positive = 0
    keywords: List[str] = []
    for word in words:
        for level in ("high", "medium", "low"):
            if word in ANGER_KEYWORDS[level]:
                anger += KEYWORD_POINTS[level]
                keywords.append(word)
                break
        if word in POSITIVE_KEYWORDS:
            positive += 2
            keywords.append(word)

    norm_anger = min(1.0, anger / (total * 0.3))
    norm_positive = min(1.0, positive / (total * 0.2))
    score = max(-1.0, min(1.0, norm_positive - norm_anger))

    if anger > total * 0.2:
        anger_level = "high"
    elif anger > total * 0.1:
        anger_level = "medium"
    else:
        anger_level = "low"

    density = len(keywords) / total
    confidence = min(1.0, max(0.1, min(0.8, total / 20) + min(0.2, density * 2)))

    if score > 0.5:
        analysis = "Very positive sentiment detected"
    elif score > 0.2:
        analysis = "Positive sentiment detected"
    elif score > -0.2:
        analysis = "Neutral sentiment detected"
    elif score > -0.5:
        analysis = "Negative sentiment detected"
    else:
        analysis = "Very negative sentiment detected"
    if anger_level != "low":
        analysis += f" with {anger_level} anger indicators"

    return SentimentMetrics(
        score=round(score, 2),
        confidence=round(confidence, 2),
        anger_level=anger_level,
        keywords=sorted(set(keywords)),
        analysis=analysis,
    )


def build_anger_parameters(
    typing: TypingMetrics,
    clicks: ClickMetrics,
    sentiment: SentimentMetrics,
    voice_tone: Optional[float] = None,
    hour: Optional[int] = None,
    rage_quits: float = 0,
    physiological: Optional[float] = None,
) -> AngerParameters:
    """Arma AngerParameters; sin voz el tono cuenta como 0 (señal ausente)."""
    return AngerParameters(
        text_sentiment=sentiment.score,
        voice_tone=voice_tone or 0.0,
        typing_speed=typing.wpm,
        click_intensity=clicks.average_intensity,
        recent_game_history=rage_quits,
        time_of_day=datetime.now().hour if hour is None else hour,
        physiological=physiological,
    )


def parameters_from_payload(p: Dict[str, Any]) -> AngerParameters:
    """Acepta AngerParameters directos o las métricas de cada paso de la evaluación.

    Body con métricas: { typing, clicks, sentiment, voice?, timeOfDay?,
    recentGameHistory?, physiological? }
    """
    if not isinstance(p, dict):
        raise ValueError("body debe ser un objeto")
    if "typing" not in p and "clicks" not in p and "sentiment" not in p:
        return AngerParameters.from_dict(p)

    missing = [k for k in ("typing", "clicks", "sentiment") if not isinstance(p.get(k), dict)]
    if missing:
        raise ValueError(f"{', '.join(missing)} requerido")
    voice = p.get("voice") or {}
    hour = first_value(p, "timeOfDay")
    physiological = first_value(p, "physiological")
    return build_anger_parameters(
        TypingMetrics.from_dict(p["typing"]),
        ClickMetrics.from_dict(p["clicks"]),
        SentimentMetrics.from_dict(p["sentiment"]),
        voice_tone=as_number(voice, "score", default=0.0) if isinstance(voice, dict) else 0.0,
        hour=None if hour is None else int(as_number(p, "timeOfDay")),
        rage_quits=as_number(p, "recentGameHistory", default=0.0),
        physiological=None if physiological is None else as_number(p, "physiological"),
    )
