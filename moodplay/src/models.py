"""Modelos de dominio: juegos, perfil de usuario y resultado de recomendación.

Los registros son inmutables; el ranking devuelve copias con match_score y
reasons recalculados en lugar de modificar el catálogo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .anger import AngerLevel, AngerScore
from .utils import as_number, first_value, format_instant, parse_instant, utcnow


COMPLETION_STATUSES = ("not_started", "in_progress", "completed", "abandoned")
DIFFICULTIES = ("easy", "medium", "hard")
MULTIPLAYER_MODES = ("single", "multiplayer", "both")
PLACEHOLDER_IMAGE = "/placeholder.svg"


class RecommendationType(str, Enum):
    LIBRARY = "LIBRARY"
    DOWNLOAD = "DOWNLOAD"


def _str_list(p: Dict[str, Any], key: str) -> List[str]:
    value = p.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"{key} debe ser una lista")
    return [str(v) for v in value]


def _choice(value: Any, allowed: tuple, name: str, default: str) -> str:
    if value in (None, ""):
        return default
    value = str(value).lower()
    if value not in allowed:
        raise ValueError(f"{name} inválido: {value}")
    return value


@dataclass(frozen=True)
class Game:
    id: str
    title: str
    description: str = ""
    genre: List[str] = field(default_factory=list)
    rating: float = 0.0
    playtime: int = 0
    last_played: datetime = field(default_factory=utcnow)
    is_installed: bool = False
    platform: List[str] = field(default_factory=list)
    user_rating: Optional[float] = None
    completion_status: str = "not_started"
    match_score: int = 0
    reasons: List[str] = field(default_factory=list)
    image_url: str = PLACEHOLDER_IMAGE
    price: Optional[float] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "Game":
        if not isinstance(p, dict):
            raise ValueError("game debe ser un objeto")
        game_id = first_value(p, "id")
        title = first_value(p, "title")
        if not game_id or not title:
            raise ValueError("id y title requeridos en cada juego")
        user_rating = first_value(p, "userRating", "user_rating")
        price = first_value(p, "price")
        return cls(
            id=str(game_id),
            title=str(title),
            description=str(p.get("description") or ""),
            genre=_str_list(p, "genre"),
            rating=as_number(p, "rating", default=0.0),
            playtime=int(as_number(p, "playtime", default=0.0)),
            last_played=parse_instant(first_value(p, "lastPlayed", "last_played")) or utcnow(),
            is_installed=bool(first_value(p, "isInstalled", "is_installed")),
            platform=_str_list(p, "platform"),
            user_rating=None if user_rating is None else as_number(p, "userRating", "user_rating"),
            completion_status=_choice(
                first_value(p, "completionStatus", "completion_status"),
                COMPLETION_STATUSES, "completionStatus", "not_started",
            ),
            match_score=int(as_number(p, "matchScore", "match_score", default=0.0)),
            reasons=_str_list(p, "reasons"),
            image_url=str(first_value(p, "imageUrl", "image_url") or PLACEHOLDER_IMAGE),
            price=None if price is None else as_number(p, "price"),
            tags=_str_list(p, "tags"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "genre": list(self.genre),
            "rating": self.rating,
            "playtime": self.playtime,
            "lastPlayed": format_instant(self.last_played),
            "isInstalled": self.is_installed,
            "platform": list(self.platform),
            "userRating": self.user_rating,
            "completionStatus": self.completion_status,
            "matchScore": self.match_score,
            "reasons": list(self.reasons),
            "imageUrl": self.image_url,
            "price": self.price,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class UserPreferences:
    favorite_genres: List[str] = field(default_factory=list)
    preferred_playtime: int = 60
    difficulty_preference: str = "medium"
    multiplayer_preference: str = "both"

    @classmethod
    def from_dict(cls, p: Optional[Dict[str, Any]]) -> "UserPreferences":
        p = p or {}
        return cls(
            favorite_genres=_str_list(p, "favoriteGenres"),
            preferred_playtime=int(as_number(p, "preferredPlaytime", default=60.0)),
            difficulty_preference=_choice(p.get("difficultyPreference"), DIFFICULTIES, "difficultyPreference", "medium"),
            multiplayer_preference=_choice(p.get("multiplayerPreference"), MULTIPLAYER_MODES, "multiplayerPreference", "both"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "favoriteGenres": list(self.favorite_genres),
            "preferredPlaytime": self.preferred_playtime,
            "difficultyPreference": self.difficulty_preference,
            "multiplayerPreference": self.multiplayer_preference,
        }


@dataclass(frozen=True)
class PlaySession:
    game_id: str
    session_start: datetime
    session_end: datetime
    rage_quit: bool = False
    mood_before: Optional[AngerScore] = None
    mood_after: Optional[AngerScore] = None

    @property
    def minutes(self) -> float:
        return (self.session_end - self.session_start).total_seconds() / 60

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "PlaySession":
        if not isinstance(p, dict):
            raise ValueError("cada sesión debe ser un objeto")
        game_id = first_value(p, "gameId", "game_id")
        start = parse_instant(first_value(p, "sessionStart", "session_start"))
        end = parse_instant(first_value(p, "sessionEnd", "session_end"))
        if not game_id or start is None or end is None:
            raise ValueError("gameId, sessionStart y sessionEnd requeridos en cada sesión")
        before = p.get("moodBefore")
        after = p.get("moodAfter")
        return cls(
            game_id=str(game_id),
            session_start=start,
            session_end=end,
            rage_quit=bool(p.get("rageQuit")),
            mood_before=AngerScore.from_dict(before) if before else None,
            mood_after=AngerScore.from_dict(after) if after else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameId": self.game_id,
            "sessionStart": format_instant(self.session_start),
            "sessionEnd": format_instant(self.session_end),
            "rageQuit": self.rage_quit,
            "moodBefore": self.mood_before.to_dict() if self.mood_before else None,
            "moodAfter": self.mood_after.to_dict() if self.mood_after else None,
        }


@dataclass
class UserProfile:
    id: str
    username: str
    preferences: UserPreferences = field(default_factory=UserPreferences)
    game_library: List[Game] = field(default_factory=list)
    play_history: List[PlaySession] = field(default_factory=list)

    def minutes_played(self, game_id: str) -> float:
        return sum(s.minutes for s in self.play_history if s.game_id == game_id)

    def rage_quit_count(self) -> int:
        return sum(1 for s in self.play_history if s.rage_quit)

    @classmethod
    def from_dict(cls, p: Dict[str, Any]) -> "UserProfile":
        if not isinstance(p, dict):
            raise ValueError("profile debe ser un objeto")
        library = p.get("gameLibrary") or []
        history = p.get("playHistory") or []
        if not isinstance(library, list) or not isinstance(history, list):
            raise ValueError("gameLibrary y playHistory deben ser listas")
        return cls(
            id=str(p.get("id") or "anonymous"),
            username=str(p.get("username") or "anonymous"),
            preferences=UserPreferences.from_dict(p.get("preferences")),
            game_library=[Game.from_dict(g) for g in library],
            play_history=[PlaySession.from_dict(s) for s in history],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "preferences": self.preferences.to_dict(),
            "gameLibrary": [g.to_dict() for g in self.game_library],
            "playHistory": [s.to_dict() for s in self.play_history],
        }


@dataclass(frozen=True)
class RecommendationResult:
    type: RecommendationType
    games: List[Game]
    message: str
    confidence: float
    anger_level: AngerLevel
    reasoning: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "games": [g.to_dict() for g in self.games],
            "message": self.message,
            "confidence": self.confidence,
            "angerLevel": self.anger_level.value,
            "reasoning": list(self.reasoning),
        }
