"""Normalizadores de señales crudas -> contribución de enojo (escala 0-100).

Funciones puras: más extremo el valor crudo, mayor la contribución. Los valores
fuera de rango se recortan, nunca se rechazan.
"""

from .utils import clamp


BASELINE_WPM = 40
BASELINE_HEART_RATE = 70


def normalize_text_sentiment(sentiment: float) -> float:
    # -1..1 -> 200..0; sin tope superior, el total ponderado se recorta después
    return max(0.0, (1 - sentiment) * 100)


def normalize_voice_tone(tone: float) -> float:
    return clamp(tone)


def normalize_typing_speed(wpm: float) -> float:
    return clamp(abs(wpm - BASELINE_WPM) * 2)


def normalize_click_intensity(force: float) -> float:
    return clamp(force)


def normalize_game_history(rage_quit_frequency: float) -> float:
    return clamp(rage_quit_frequency * 20)


def normalize_time_of_day(hour: int) -> float:
    """Fatiga por franja horaria: madrugada > hora pico tarde > hora pico mañana."""
    if hour >= 22 or hour <= 6:
        return 30.0
    if 7 <= hour <= 9:
        return 20.0
    if 17 <= hour <= 19:
        return 25.0
    return 10.0


def normalize_physiological(heart_rate: float) -> float:
    return clamp(abs(heart_rate - BASELINE_HEART_RATE))
