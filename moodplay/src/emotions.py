"""Clasificador de emociones independiente del motor de enojo.

Usa solo tono de voz, sentimiento de texto y hora del día. Puede discrepar con
AngerDetectionEngine: son fórmulas distintas sobre las mismas entradas.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .anger import AngerLevel, AngerParameters
from .utils import clamp


class EmotionType(str, Enum):
    CALM = "CALM"
    RELAXED = "RELAXED"
    HAPPY = "HAPPY"
    EXCITED = "EXCITED"
    ANXIOUS = "ANXIOUS"
    FRUSTRATED = "FRUSTRATED"
    ANGRY = "ANGRY"
    STRESSED = "STRESSED"


EMOTION_RECOMMENDATIONS: Dict[EmotionType, List[str]] = {
    EmotionType.CALM: [
        "Try strategy or puzzle games",
        "Explore open-world games with relaxing environments",
        "Consider story-driven games with rich narratives",
    ],
    EmotionType.RELAXED: [
        "Play casual games",
        "Try creative building games",
        "Explore adventure games with beautiful worlds",
    ],
    EmotionType.HAPPY: [
        "Play multiplayer games with friends",
        "Try competitive games",
        "Explore new game genres",
    ],
    EmotionType.EXCITED: [
        "Play action-packed games",
        "Try sports or racing games",
        "Explore fast-paced multiplayer games",
    ],
    EmotionType.ANXIOUS: [
        "Play relaxing puzzle games",
        "Try calming simulation games",
        "Avoid competitive multiplayer games",
    ],
    EmotionType.FRUSTRATED: [
        "Take a short break before gaming",
        "Try casual or creative games",
        "Consider single-player story games",
    ],
    EmotionType.ANGRY: [
        "Take a break and relax",
        "Try meditation or relaxation exercises",
        "Consider non-competitive games when returning",
    ],
    EmotionType.STRESSED: [
        "Play relaxing games with calming music",
        "Try games with nature or exploration",
        "Consider taking a break before playing",
    ],
}

DEFAULT_RECOMMENDATIONS: List[str] = [
    "Try a variety of games to see what you enjoy",
    "Explore different game genres",
    "Take breaks and stay hydrated",
]

# Nivel de enojo -> emociones candidatas (se elige una al azar)
LEVEL_EMOTIONS: Dict[AngerLevel, tuple] = {
    AngerLevel.CALM: (EmotionType.CALM, EmotionType.RELAXED),
    AngerLevel.MILD: (EmotionType.RELAXED, EmotionType.HAPPY),
    AngerLevel.MODERATE: (EmotionType.ANXIOUS, EmotionType.FRUSTRATED),
    AngerLevel.HIGH: (EmotionType.FRUSTRATED, EmotionType.ANGRY),
    AngerLevel.EXTREME: (EmotionType.ANGRY,),
}


@dataclass(frozen=True)
class EmotionResult:
    emotion: EmotionType
    confidence: float
    factors: Dict[str, Optional[float]]
    recommendations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emotion": self.emotion.value,
            "confidence": self.confidence,
            "factors": {
                "voiceTone": self.factors.get("voice_tone"),
                "textSentiment": self.factors.get("text_sentiment"),
                "timeOfDay": self.factors.get("time_of_day"),
                "physiological": self.factors.get("physiological"),
            },
            "recommendations": list(self.recommendations),
        }


def get_recommendations(emotion: Any) -> List[str]:
    return list(EMOTION_RECOMMENDATIONS.get(emotion, DEFAULT_RECOMMENDATIONS))


class EmotionDetectionService:

    def detect_emotion(self, params: AngerParameters) -> EmotionResult:
        voice = self.analyze_voice_tone(params.voice_tone)
        text = self.analyze_text_sentiment(params.text_sentiment)
        time_score = self.analyze_time_of_day(params.time_of_day)

        combined = voice * 0.6 + text * 0.4
        if combined > 0.7:
            emotion = EmotionType.EXCITED if text > 0.5 else EmotionType.ANGRY
            confidence = 0.8
        elif combined > 0.4:
            if text > 0.5:
                emotion = EmotionType.HAPPY
            else:
                emotion = EmotionType.FRUSTRATED if voice > 0.5 else EmotionType.ANXIOUS
            confidence = 0.7
        elif combined > 0.2:
            emotion = EmotionType.RELAXED
            confidence = 0.6
        else:
            emotion = EmotionType.CALM
            confidence = 0.9

        # madrugada convierte ansiedad/frustración en estrés
        if time_score > 0.6 and emotion in (EmotionType.ANXIOUS, EmotionType.FRUSTRATED):
            emotion = EmotionType.STRESSED
            confidence = min(0.9, confidence + 0.1)

        return EmotionResult(
            emotion=emotion,
            confidence=confidence,
            factors={
                "voice_tone": voice,
                "text_sentiment": text,
                "time_of_day": time_score,
                "physiological": params.physiological or None,
            },
            recommendations=get_recommendations(emotion),
        )

    @staticmethod
    def analyze_voice_tone(voice_tone: float) -> float:
        return clamp(voice_tone / 100, 0.0, 1.0)

    @staticmethod
    def analyze_text_sentiment(sentiment: float) -> float:
        return clamp((sentiment + 1) / 2, 0.0, 1.0)

    @staticmethod
    def analyze_time_of_day(hour: int) -> float:
        if hour >= 22 or hour < 6:
            return 0.7
        if 7 <= hour < 9:
            return 0.6
        if 17 <= hour < 20:
            return 0.5
        return 0.3

    @staticmethod
    def map_anger_level_to_emotion(level: AngerLevel, rng: Optional[random.Random] = None) -> EmotionType:
        candidates = LEVEL_EMOTIONS.get(level)
        if not candidates:
            return EmotionType.CALM
        return (rng or random).choice(candidates)
