"""Proveedor de sugerencias simulado; reemplaza a catálogos externos (IGDB, RAWG)."""

from typing import List

from ..models import Game, UserProfile
from ..utils import utcnow
from .base import SuggestionProvider


class MockSuggestionProvider(SuggestionProvider):
    name = "mock"

    def _candidates(self) -> List[Game]:
        now = utcnow()
        return [
            Game(
                id="stardew-valley",
                title="Stardew Valley",
                description="A relaxing farming simulation perfect for unwinding",
                genre=["Farming Sim", "Relaxing", "Sandbox"],
                rating=4.8,
                playtime=0,
                last_played=now,
                is_installed=False,
                platform=["PC", "Mobile", "Console"],
                completion_status="not_started",
                match_score=95,
                reasons=["Relaxing", "Creative", "Low Stress"],
                price=14.99,
                tags=["relaxing", "farming", "indie"],
            ),
            Game(
                id="journey",
                title="Journey",
                description="A beautiful, meditative adventure game",
                genre=["Adventure", "Walking Sim", "Relaxing"],
                rating=4.9,
                playtime=0,
                last_played=now,
                is_installed=False,
                platform=["PC", "Console"],
                completion_status="not_started",
                match_score=92,
                reasons=["Meditative", "Beautiful", "Peaceful"],
                price=14.99,
                tags=["meditation", "beautiful", "peaceful"],
            ),
        ]

    async def suggest_games(self, recommended: List[str], avoid: List[str], profile: UserProfile) -> List[Game]:
        wanted = [r.lower() for r in recommended]
        return [
            g for g in self._candidates()
            if any(rec in genre.lower() for genre in g.genre for rec in wanted)
        ]
