from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List

from ..models import Game, UserProfile


STORE_BY_PLATFORM: Dict[str, str] = {
    "pc": "Steam",
    "mobile": "App Store",
    "console": "PlayStation Store",
}


class SuggestionProvider(ABC):
    """Clase base para fuentes externas de sugerencias (camino DOWNLOAD).

    Devuelve juegos ya filtrados por género; el motor de recomendación
    impone el timeout y el fallback.
    """

    name: str = "provider"

    @abstractmethod
    async def suggest_games(self, recommended: List[str], avoid: List[str], profile: UserProfile) -> List[Game]:
        raise NotImplementedError

    @staticmethod
    def make_store_link(platform: str) -> str:
        return STORE_BY_PLATFORM.get(platform.lower(), platform)

    def add_platform_links(self, games: List[Game]) -> List[Game]:
        return [replace(g, platform=[self.make_store_link(p) for p in g.platform]) for g in games]
