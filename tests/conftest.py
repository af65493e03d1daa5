"""
Pytest configuration and fixtures.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SUGGESTION_PROVIDER", "mock")

from moodplay import create_app
from moodplay.src.anger import AngerLevel, AngerParameters, AngerScore
from moodplay.src.models import Game, PlaySession, UserProfile


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    """Fixed clock for deterministic recency scores."""
    return lambda: NOW


@pytest.fixture
def make_game():
    def _make(game_id, genre, days_ago=10, installed=True, user_rating=None,
              status="not_started", rating=4.0, playtime=120, platform=None):
        return Game(
            id=game_id,
            title=game_id.title(),
            genre=list(genre),
            rating=rating,
            playtime=playtime,
            last_played=NOW - timedelta(days=days_ago),
            is_installed=installed,
            platform=platform or ["PC"],
            user_rating=user_rating,
            completion_status=status,
        )
    return _make


@pytest.fixture
def make_score():
    def _make(level, score=None, confidence=0.75):
        defaults = {
            AngerLevel.CALM: 10,
            AngerLevel.MILD: 30,
            AngerLevel.MODERATE: 50,
            AngerLevel.HIGH: 70,
            AngerLevel.EXTREME: 90,
        }
        return AngerScore(
            score=defaults[level] if score is None else score,
            level=level,
            confidence=confidence,
            parameters=AngerParameters(
                text_sentiment=0.0,
                voice_tone=0.0,
                typing_speed=40,
                click_intensity=0.0,
                recent_game_history=0.0,
                time_of_day=12,
            ),
            timestamp=NOW,
        )
    return _make


@pytest.fixture
def make_profile():
    def _make(library=None, history=None):
        return UserProfile(
            id="user-1",
            username="tester",
            game_library=list(library or []),
            play_history=list(history or []),
        )
    return _make


@pytest.fixture
def session_for():
    def _make(game_id, minutes, rage_quit=False):
        start = NOW - timedelta(days=1)
        return PlaySession(
            game_id=game_id,
            session_start=start,
            session_end=start + timedelta(minutes=minutes),
            rage_quit=rage_quit,
        )
    return _make
