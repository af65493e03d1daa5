"""Motor de recomendación: filtra la biblioteca por nivel de enojo y la ordena.

Pasos:
    1. categorías recomendadas / a evitar según el nivel
    2. juegos instalados con al menos una categoría recomendada y ninguna a evitar
    3. si hay coincidencias -> LIBRARY con ranking multi-factor
    4. si no -> DOWNLOAD con sugerencias externas (timeout + fallback aleatorio)
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from .anger import AngerDetectionEngine, AngerLevel, AngerScore
from .catalog import get_random_games
from .config import Config
from .models import Game, RecommendationResult, RecommendationType, UserProfile
from .providers.base import SuggestionProvider
from .providers.mock import MockSuggestionProvider
from .utils import backoff_retry, clamp, round_half_up, utcnow


logger = logging.getLogger(__name__)

LIBRARY_MESSAGE = "Try these games from your library that match your current mood"
DOWNLOAD_MESSAGE = "Consider trying these games that match your current mood"

COMPLETION_SCORES: Dict[str, int] = {
    "not_started": 100,
    "in_progress": 80,
    "abandoned": 60,
    "completed": 20,
}
DEFAULT_COMPLETION_SCORE = 50

# Nivel -> (géneros con bonus, bonus) para el mood match
MOOD_BONUS: Dict[AngerLevel, Tuple[frozenset, int]] = {
    AngerLevel.CALM: (frozenset({"Strategy", "Puzzle", "Building"}), 30),
    AngerLevel.MILD: (frozenset({"Adventure", "Racing", "Sports"}), 25),
    AngerLevel.MODERATE: (frozenset({"Action", "Fighting"}), 25),
    AngerLevel.HIGH: (frozenset({"Casual", "Relaxing", "Music"}), 30),
    AngerLevel.EXTREME: (frozenset({"Meditation", "Walking Sim"}), 35),
}

LEVEL_REASONS: Dict[AngerLevel, List[str]] = {
    AngerLevel.CALM: ["Perfect for your relaxed state", "Engaging without stress"],
    AngerLevel.MILD: ["Good balance of challenge and fun", "Won't add to your frustration"],
    AngerLevel.MODERATE: ["Provides healthy outlet for energy", "Engaging action to channel emotions"],
    AngerLevel.HIGH: ["Designed to help you relax", "Low-pressure gameplay"],
    AngerLevel.EXTREME: ["Specifically calming experience", "Helps reduce stress levels"],
}


def _matches_any(genres: List[str], categories: List[str]) -> bool:
    for genre in genres:
        g = genre.lower()
        for category in categories:
            c = category.lower()
            if c in g or g in c:
                return True
    return False


def filter_by_categories(games: List[Game], recommended: List[str], avoid: List[str]) -> List[Game]:
    """Coincidencia por substring sin distinguir mayúsculas; evitar gana a recomendar."""
    return [
        g for g in games
        if _matches_any(g.genre, recommended) and not _matches_any(g.genre, avoid)
    ]


def get_completion_score(status: str) -> int:
    return COMPLETION_SCORES.get(status, DEFAULT_COMPLETION_SCORE)


def calculate_mood_match(game: Game, level: AngerLevel) -> float:
    score = 50
    bonus = MOOD_BONUS.get(level)
    if bonus and any(g in bonus[0] for g in game.genre):
        score += bonus[1]
    return clamp(score)


def generate_reasoning(game: Optional[Game], score: AngerScore) -> List[str]:
    reasons = list(LEVEL_REASONS.get(score.level, []))
    if game is None:
        return reasons
    if game.rating >= 4.5:
        reasons.append("Highly rated by players")
    if game.playtime < 60:
        reasons.append("Quick sessions available")
    return reasons


class RecommendationEngine:
    def __init__(
        self,
        suggestion_provider: Optional[SuggestionProvider] = None,
        anger_engine: Optional[AngerDetectionEngine] = None,
        clock: Optional[Callable[[], datetime]] = None,
        limit: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        max_tries: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.provider = suggestion_provider or MockSuggestionProvider()
        self.anger_engine = anger_engine or AngerDetectionEngine()
        self._clock = clock or utcnow
        self.limit = limit if limit is not None else Config.RECOMMENDATION_LIMIT
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else Config.SUGGESTION_TIMEOUT_SECONDS
        self.max_tries = max_tries if max_tries is not None else Config.SUGGESTION_MAX_TRIES
        self._rng = rng

    async def recommend_games(self, profile: UserProfile, score: AngerScore) -> RecommendationResult:
        recommended = self.anger_engine.get_recommended_categories(score.level)
        avoid = self.anger_engine.get_avoid_categories(score.level)

        installed = [g for g in profile.game_library if g.is_installed]
        matching = filter_by_categories(installed, recommended, avoid)

        if matching:
            ranked = self.rank_by_preference(matching, profile, score)
            logger.debug("library recommendation user=%s level=%s matches=%d",
                         profile.id, score.level.value, len(ranked))
            return RecommendationResult(
                type=RecommendationType.LIBRARY,
                games=ranked[: self.limit],
                message=LIBRARY_MESSAGE,
                confidence=score.confidence,
                anger_level=score.level,
                reasoning=generate_reasoning(ranked[0], score),
            )

        suggestions = self.provider.add_platform_links(
            await self.fetch_game_suggestions(recommended, avoid, profile)
        )
        logger.debug("download recommendation user=%s level=%s suggestions=%d",
                     profile.id, score.level.value, len(suggestions))
        return RecommendationResult(
            type=RecommendationType.DOWNLOAD,
            games=suggestions,
            message=DOWNLOAD_MESSAGE,
            confidence=score.confidence,
            anger_level=score.level,
            reasoning=generate_reasoning(suggestions[0] if suggestions else None, score),
        )

    async def fetch_game_suggestions(self, recommended: List[str], avoid: List[str], profile: UserProfile) -> List[Game]:
        async def _do():
            return await asyncio.wait_for(
                self.provider.suggest_games(recommended, avoid, profile),
                timeout=self.timeout_seconds,
            )

        try:
            return list(await backoff_retry(_do, max_tries=self.max_tries))
        except asyncio.TimeoutError:
            logger.warning("suggestion provider %s timed out after %.1fs, using random catalog games",
                           self.provider.name, self.timeout_seconds)
        except Exception as e:
            logger.warning("suggestion provider %s failed (%s: %s), using random catalog games",
                           self.provider.name, type(e).__name__, e)
        return get_random_games(self.limit, rng=self._rng)

    def rank_by_preference(self, games: List[Game], profile: UserProfile, score: AngerScore) -> List[Game]:
        now = self._clock()
        ranked = [
            replace(
                game,
                match_score=self.calculate_match_score(game, profile, score, now),
                reasons=generate_reasoning(game, score),
            )
            for game in games
        ]
        # sort estable: empates conservan el orden de la biblioteca
        ranked.sort(key=lambda g: g.match_score, reverse=True)
        return ranked

    def calculate_match_score(self, game: Game, profile: UserProfile, score: AngerScore, now: Optional[datetime] = None) -> int:
        now = now or self._clock()
        total = 0.0

        playtime_score = max(0.0, 100 - profile.minutes_played(game.id))
        total += playtime_score * 0.25

        days_since = (now - game.last_played).total_seconds() / 86400
        recency_score = min(100.0, days_since * 2)
        total += recency_score * 0.20

        # TODO: confirmar si user_rating debería ponderarse como el resto (x0.15)
        if game.user_rating:
            total += game.user_rating * 20
        total += 0.15

        total += get_completion_score(game.completion_status) * 0.20
        total += calculate_mood_match(game, score.level) * 0.20
        return round_half_up(total)
