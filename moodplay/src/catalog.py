"""Catálogo estático de juegos agrupado por nivel de enojo.

Solo lectura: las funciones devuelven listas nuevas, nunca el catálogo interno.
"""

import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from .models import Game
from .utils import utcnow


def _days_ago(days: int) -> datetime:
    return utcnow() - timedelta(days=days)


GAME_DATABASE: List[Game] = [
    # CALM (0-20)
    Game(
        id="stardew-valley",
        title="Stardew Valley",
        description="A peaceful farming simulation where you can tend crops, raise animals, and build relationships in a charming pixel art world.",
        genre=["Farming Sim", "Life Sim", "RPG"],
        rating=4.8,
        playtime=120,
        last_played=_days_ago(7),
        is_installed=True,
        platform=["PC", "Switch", "Mobile"],
        user_rating=5,
        completion_status="in_progress",
        match_score=95,
        reasons=["Relaxing gameplay", "Creative freedom", "Low stress", "Social optional"],
        price=14.99,
        tags=["relaxing", "creative", "farming", "social", "pixel-art"],
    ),
    Game(
        id="animal-crossing",
        title="Animal Crossing: New Horizons",
        description="A delightful life simulation where you build your own island paradise and interact with charming animal villagers.",
        genre=["Life Sim", "Social Sim", "Adventure"],
        rating=4.7,
        playtime=90,
        last_played=_days_ago(5),
        is_installed=True,
        platform=["Switch"],
        user_rating=5,
        completion_status="in_progress",
        match_score=93,
        reasons=["Charming characters", "No pressure", "Creative design", "Social interaction"],
        price=59.99,
        tags=["charming", "no-pressure", "creative", "social", "island-life"],
    ),
    Game(
        id="minecraft",
        title="Minecraft",
        description="Endless creativity in a block-based world where you can build, explore, and create anything you imagine.",
        genre=["Sandbox", "Adventure", "Building"],
        rating=4.7,
        playtime=300,
        last_played=_days_ago(14),
        is_installed=True,
        platform=["PC", "Console", "Mobile"],
        user_rating=4,
        completion_status="in_progress",
        match_score=90,
        reasons=["Creative freedom", "Flexible social", "Any energy level", "Relaxing"],
        price=26.95,
        tags=["creative", "building", "exploration", "relaxing", "sandbox"],
    ),
    Game(
        id="civilization-vi",
        title="Sid Meier's Civilization VI",
        description="Turn-based strategy game where you build an empire, explore the world, and advance through history.",
        genre=["Strategy", "Turn-based", "4X"],
        rating=4.6,
        playtime=180,
        last_played=_days_ago(3),
        is_installed=True,
        platform=["PC", "Switch"],
        user_rating=5,
        completion_status="not_started",
        match_score=88,
        reasons=["Strategic thinking", "Low pressure", "Educational", "Engaging"],
        price=59.99,
        tags=["strategy", "turn-based", "educational", "empire-building", "historical"],
    ),
    # MILD (21-40)
    Game(
        id="hades",
        title="Hades",
        description="Fast-paced roguelike with stellar combat, amazing story, and just the right amount of challenge.",
        genre=["Roguelike", "Action", "RPG"],
        rating=4.9,
        playtime=90,
        last_played=_days_ago(1),
        is_installed=True,
        platform=["PC", "Switch", "Xbox", "PlayStation"],
        user_rating=5,
        completion_status="in_progress",
        match_score=87,
        reasons=["High energy", "Challenging", "Engaging story", "Quick sessions"],
        price=24.99,
        tags=["action", "roguelike", "challenging", "story-driven", "combat"],
    ),
    Game(
        id="fall-guys",
        title="Fall Guys",
        description="A colorful battle royale party game of wacky obstacle courses.",
        genre=["Battle Royale", "Party", "Multiplayer"],
        rating=4.5,
        playtime=45,
        last_played=_days_ago(2),
        is_installed=True,
        platform=["PC", "Switch", "Xbox", "PlayStation"],
        user_rating=4,
        completion_status="in_progress",
        match_score=84,
        reasons=["Fun multiplayer", "Lighthearted", "Quick matches", "Social fun"],
        price=0,
        tags=["multiplayer", "fun", "lighthearted", "quick-matches", "social"],
    ),
    Game(
        id="forza-horizon-5",
        title="Forza Horizon 5",
        description="Open-world racing game set in Mexico with stunning graphics and exhilarating driving.",
        genre=["Racing", "Open World", "Sports"],
        rating=4.8,
        playtime=60,
        last_played=_days_ago(2),
        is_installed=True,
        platform=["PC", "Xbox"],
        user_rating=4,
        completion_status="in_progress",
        match_score=85,
        reasons=["Exciting", "Beautiful visuals", "Freedom to explore", "Skill-based"],
        price=59.99,
        tags=["racing", "open-world", "beautiful", "exciting", "freedom"],
    ),
    Game(
        id="fifa-24",
        title="EA FC 24",
        description="Football simulation with realistic gameplay, multiple modes, and competitive matches.",
        genre=["Sports", "Simulation", "Multiplayer"],
        rating=4.5,
        playtime=45,
        last_played=_days_ago(1),
        is_installed=True,
        platform=["PC", "Console"],
        user_rating=4,
        completion_status="in_progress",
        match_score=82,
        reasons=["Team sports", "Strategic", "Social", "Skill development"],
        price=69.99,
        tags=["sports", "football", "competitive", "team-based", "strategic"],
    ),
    # MODERATE (41-60)
    Game(
        id="devil-may-cry-5",
        title="Devil May Cry 5",
        description="Stylish action game with over-the-top combat and satisfying combos.",
        genre=["Action", "Hack-n-Slash", "Adventure"],
        rating=4.7,
        playtime=75,
        last_played=_days_ago(5),
        is_installed=True,
        platform=["PC", "Xbox", "PlayStation"],
        user_rating=4,
        completion_status="in_progress",
        match_score=80,
        reasons=["High energy", "Skill expression", "Satisfying combat", "Cool factor"],
        price=59.99,
        tags=["action", "hack-n-slash", "stylish", "combat", "cool"],
    ),
    Game(
        id="street-fighter-6",
        title="Street Fighter 6",
        description="Classic fighting game with deep mechanics, diverse characters, and competitive gameplay.",
        genre=["Fighting", "Action", "Competitive"],
        rating=4.6,
        playtime=30,
        last_played=_days_ago(3),
        is_installed=True,
        platform=["PC", "Xbox", "PlayStation"],
        user_rating=4,
        completion_status="in_progress",
        match_score=78,
        reasons=["Skill-based", "Quick matches", "Competitive", "Satisfying"],
        price=59.99,
        tags=["fighting", "competitive", "skill-based", "quick-matches", "classic"],
    ),
    Game(
        id="need-for-speed-heat",
        title="Need for Speed Heat",
        description="Arcade racing with police chases, customization, and high-speed action.",
        genre=["Racing", "Action", "Arcade"],
        rating=4.4,
        playtime=60,
        last_played=_days_ago(7),
        is_installed=True,
        platform=["PC", "Console"],
        user_rating=3,
        completion_status="in_progress",
        match_score=75,
        reasons=["Fast-paced", "Exciting", "Freedom", "Adrenaline"],
        price=59.99,
        tags=["racing", "action", "fast-paced", "police-chase", "customization"],
    ),
    # HIGH (61-80)
    Game(
        id="journey",
        title="Journey",
        description="A beautiful, meditative adventure about discovery and connection in a vast desert.",
        genre=["Adventure", "Walking Sim", "Art"],
        rating=4.8,
        playtime=120,
        last_played=_days_ago(30),
        is_installed=True,
        platform=["PC", "PlayStation"],
        user_rating=5,
        completion_status="completed",
        match_score=92,
        reasons=["Meditative", "Beautiful", "Low stress", "Emotional"],
        price=14.99,
        tags=["meditative", "beautiful", "emotional", "low-stress", "artistic"],
    ),
    Game(
        id="abzu",
        title="ABZÛ",
        description="Underwater exploration game with stunning visuals and peaceful swimming.",
        genre=["Adventure", "Exploration", "Relaxing"],
        rating=4.5,
        playtime=90,
        last_played=_days_ago(45),
        is_installed=True,
        platform=["PC", "Console"],
        user_rating=4,
        completion_status="completed",
        match_score=88,
        reasons=["Peaceful", "Beautiful", "Exploration", "Low pressure"],
        price=19.99,
        tags=["peaceful", "underwater", "exploration", "beautiful", "relaxing"],
    ),
    Game(
        id="flower",
        title="Flower",
        description="A zen-like game where you guide flower petals in the wind.",
        genre=["Art", "Relaxing", "Indie"],
        rating=4.6,
        playtime=60,
        last_played=_days_ago(60),
        is_installed=True,
        platform=["PC", "PlayStation", "Mobile"],
        user_rating=5,
        completion_status="completed",
        match_score=85,
        reasons=["Zen-like", "Beautiful", "No pressure", "Meditative"],
        price=6.99,
        tags=["zen", "beautiful", "meditative", "no-pressure", "artistic"],
    ),
    # EXTREME (81-100)
    Game(
        id="meditation-app",
        title="Headspace",
        description="Guided meditation app with breathing exercises and mindfulness techniques.",
        genre=["Meditation", "Wellness", "App"],
        rating=4.7,
        playtime=20,
        last_played=_days_ago(1),
        is_installed=True,
        platform=["Mobile", "Web"],
        user_rating=5,
        completion_status="in_progress",
        match_score=95,
        reasons=["Stress relief", "Breathing exercises", "Mindfulness", "Professional guidance"],
        price=12.99,
        tags=["meditation", "stress-relief", "breathing", "mindfulness", "wellness"],
    ),
    Game(
        id="calm-app",
        title="Calm",
        description="Sleep and meditation app with soothing sounds, stories, and relaxation techniques.",
        genre=["Wellness", "Meditation", "Sleep"],
        rating=4.8,
        playtime=30,
        last_played=_days_ago(2),
        is_installed=True,
        platform=["Mobile", "Web"],
        user_rating=4,
        completion_status="in_progress",
        match_score=90,
        reasons=["Sleep aid", "Relaxation", "Soothing sounds", "Professional content"],
        price=14.99,
        tags=["sleep", "relaxation", "soothing", "meditation", "wellness"],
    ),
    Game(
        id="walking-sim",
        title="Proteus",
        description="A procedurally generated exploration game with no goals, just peaceful wandering.",
        genre=["Exploration", "Walking Sim", "Indie"],
        rating=4.3,
        playtime=45,
        last_played=_days_ago(90),
        is_installed=True,
        platform=["PC"],
        user_rating=4,
        completion_status="completed",
        match_score=87,
        reasons=["No pressure", "Peaceful", "Exploration", "Minimalist"],
        price=9.99,
        tags=["no-pressure", "peaceful", "exploration", "minimalist", "procedural"],
    ),
]

MOOD_GAME_IDS: Dict[str, List[str]] = {
    "CALM": ["stardew-valley", "animal-crossing", "minecraft", "civilization-vi"],
    "MILD": ["hades", "fall-guys", "forza-horizon-5", "fifa-24"],
    "MODERATE": ["devil-may-cry-5", "street-fighter-6", "need-for-speed-heat"],
    "HIGH": ["journey", "abzu", "flower"],
    "EXTREME": ["meditation-app", "calm-app", "walking-sim"],
}


def all_games() -> List[Game]:
    return list(GAME_DATABASE)


def get_game_by_id(game_id: str) -> Optional[Game]:
    for game in GAME_DATABASE:
        if game.id == game_id:
            return game
    return None


def get_games_by_mood(level) -> List[Game]:
    """Juegos del catálogo para un nivel; niveles desconocidos usan CALM."""
    key = getattr(level, "value", level)
    ids = MOOD_GAME_IDS.get(str(key).upper(), MOOD_GAME_IDS["CALM"])
    return [game for game in GAME_DATABASE if game.id in ids]


def get_random_games(count: int = 6, rng: Optional[random.Random] = None) -> List[Game]:
    """Mezcla Fisher-Yates completa (random.shuffle) y toma los primeros `count`."""
    if count <= 0:
        return []
    shuffled = list(GAME_DATABASE)
    (rng or random).shuffle(shuffled)
    return shuffled[:count]
