"""
Unit tests for signal normalizers and the anger scoring engine.
"""
import pytest

from moodplay.src import normalizers
from moodplay.src.anger import (
    AngerDetectionEngine,
    AngerLevel,
    AngerParameters,
    AngerScore,
    get_anger_level,
)
from tests.conftest import NOW


def params(**overrides):
    base = dict(
        text_sentiment=0.0,
        voice_tone=0.0,
        typing_speed=40,
        click_intensity=0.0,
        recent_game_history=0.0,
        time_of_day=12,
        physiological=None,
    )
    base.update(overrides)
    return AngerParameters(**base)


class TestNormalizers:
    """Test suite for the per-signal normalizers."""

    def test_text_sentiment(self):
        assert normalizers.normalize_text_sentiment(1) == 0
        assert normalizers.normalize_text_sentiment(0) == 100
        assert normalizers.normalize_text_sentiment(-1) == 200
        assert normalizers.normalize_text_sentiment(3) == 0

    def test_voice_and_click_are_clamped(self):
        assert normalizers.normalize_voice_tone(150) == 100
        assert normalizers.normalize_voice_tone(-5) == 0
        assert normalizers.normalize_click_intensity(42.5) == 42.5
        assert normalizers.normalize_click_intensity(250) == 100

    def test_typing_speed_deviation(self):
        assert normalizers.normalize_typing_speed(40) == 0
        assert normalizers.normalize_typing_speed(50) == 20
        assert normalizers.normalize_typing_speed(30) == 20
        assert normalizers.normalize_typing_speed(200) == 100

    def test_game_history(self):
        assert normalizers.normalize_game_history(2) == 40
        assert normalizers.normalize_game_history(9) == 100

    @pytest.mark.parametrize("hour,expected", [
        (0, 30), (6, 30), (22, 30), (23, 30),
        (7, 20), (9, 20),
        (17, 25), (19, 25),
        (10, 10), (14, 10), (20, 10), (21, 10),
    ])
    def test_time_of_day(self, hour, expected):
        assert normalizers.normalize_time_of_day(hour) == expected

    def test_physiological(self):
        assert normalizers.normalize_physiological(70) == 0
        assert normalizers.normalize_physiological(100) == 30
        assert normalizers.normalize_physiological(40) == 30
        assert normalizers.normalize_physiological(300) == 100


class TestAngerLevel:
    """Test suite for the score -> level partition."""

    @pytest.mark.parametrize("score,level", [
        (0, AngerLevel.CALM),
        (20, AngerLevel.CALM),
        (21, AngerLevel.MILD),
        (40, AngerLevel.MILD),
        (41, AngerLevel.MODERATE),
        (60, AngerLevel.MODERATE),
        (61, AngerLevel.HIGH),
        (80, AngerLevel.HIGH),
        (81, AngerLevel.EXTREME),
        (100, AngerLevel.EXTREME),
    ])
    def test_boundaries(self, score, level):
        assert get_anger_level(score) == level

    def test_parse(self):
        assert AngerLevel.parse("moderate") is AngerLevel.MODERATE
        with pytest.raises(ValueError, match="no soportado"):
            AngerLevel.parse("FURIOUS")


class TestCalculateAngerScore:
    """Test suite for AngerDetectionEngine.calculate_anger_score."""

    def setup_method(self):
        self.engine = AngerDetectionEngine(clock=lambda: NOW)

    def test_reference_scenario(self):
        result = self.engine.calculate_anger_score(params(
            text_sentiment=-0.8,
            voice_tone=0,
            typing_speed=40,
            click_intensity=10,
            recent_game_history=0,
            time_of_day=14,
        ))
        assert result.score == 47
        assert result.level == AngerLevel.MODERATE
        assert result.timestamp == NOW

    def test_parameters_are_retained(self):
        p = params(text_sentiment=0.5, click_intensity=30)
        assert self.engine.calculate_anger_score(p).parameters is p

    def test_extreme_inputs_clamp_to_100(self):
        result = self.engine.calculate_anger_score(params(
            text_sentiment=-5,
            voice_tone=500,
            typing_speed=500,
            click_intensity=500,
            recent_game_history=100,
            time_of_day=23,
            physiological=300,
        ))
        assert result.score == 100
        assert result.level == AngerLevel.EXTREME

    def test_negative_inputs_never_go_below_zero(self):
        result = self.engine.calculate_anger_score(params(
            text_sentiment=5,
            click_intensity=-50,
            recent_game_history=-3,
        ))
        # only the time-of-day term (10 * 0.05) survives
        assert result.score == 1
        assert result.level == AngerLevel.CALM

    def test_physiological_adds_weighted_term(self):
        without = self.engine.calculate_anger_score(params(text_sentiment=1, time_of_day=12))
        with_hr = self.engine.calculate_anger_score(params(text_sentiment=1, time_of_day=12, physiological=120))
        # |120 - 70| = 50 * 0.10 = 5
        assert with_hr.score - without.score == 5

    def test_level_always_matches_score(self):
        for sentiment in (-1, -0.6, -0.2, 0, 0.4, 1):
            for voice in (0, 35, 80):
                for clicks in (0, 50, 100):
                    result = self.engine.calculate_anger_score(params(
                        text_sentiment=sentiment, voice_tone=voice, click_intensity=clicks,
                        typing_speed=70, recent_game_history=2,
                    ))
                    assert 0 <= result.score <= 100
                    assert result.level == get_anger_level(result.score)


class TestConfidence:
    """Test suite for signal-availability confidence."""

    def setup_method(self):
        self.engine = AngerDetectionEngine()

    def test_base_signals_only(self):
        result = self.engine.calculate_anger_score(params())
        assert result.confidence == pytest.approx(0.75 / 1.05)

    def test_voice_increases_confidence(self):
        result = self.engine.calculate_anger_score(params(voice_tone=40))
        assert result.confidence == pytest.approx(0.95 / 1.05)

    def test_all_signals_give_full_confidence(self):
        result = self.engine.calculate_anger_score(params(voice_tone=40, physiological=90))
        assert result.confidence == pytest.approx(1.0)

    def test_monotonic_in_optional_signals(self):
        base = self.engine.calculate_anger_score(params()).confidence
        phys = self.engine.calculate_anger_score(params(physiological=70)).confidence
        voice = self.engine.calculate_anger_score(params(voice_tone=10)).confidence
        both = self.engine.calculate_anger_score(params(voice_tone=10, physiological=70)).confidence
        assert base < phys <= both
        assert base < voice <= both


class TestCategoryTables:
    """Test suite for recommended / avoid category lookups."""

    def test_recommended_exact(self):
        engine = AngerDetectionEngine()
        assert engine.get_recommended_categories(AngerLevel.CALM) == ["Strategy", "Puzzle", "Building", "RPG", "Adventure"]
        assert engine.get_recommended_categories(AngerLevel.MILD) == ["Adventure", "Racing", "Sports", "Simulation"]
        assert engine.get_recommended_categories(AngerLevel.MODERATE) == ["Action", "Fighting", "Hack-n-Slash", "Racing"]
        assert engine.get_recommended_categories(AngerLevel.HIGH) == ["Casual", "Relaxing", "Sandbox", "Music", "Walking Sim"]
        assert engine.get_recommended_categories(AngerLevel.EXTREME) == ["Meditation", "Music", "Walking Sim", "Puzzle", "Relaxing"]

    def test_avoid_exact(self):
        engine = AngerDetectionEngine()
        assert engine.get_avoid_categories(AngerLevel.CALM) == []
        assert engine.get_avoid_categories(AngerLevel.MILD) == ["Dark Souls-like", "Roguelike"]
        assert engine.get_avoid_categories(AngerLevel.MODERATE) == ["Competitive Multiplayer", "PvP"]
        assert engine.get_avoid_categories(AngerLevel.HIGH) == ["PvP", "Roguelike", "Competitive"]
        assert engine.get_avoid_categories(AngerLevel.EXTREME) == ["All Competitive", "PvP", "Roguelike", "Dark Souls-like"]

    def test_lookups_are_pure(self):
        engine = AngerDetectionEngine()
        first = engine.get_recommended_categories(AngerLevel.HIGH)
        first.append("Battle Royale")
        assert engine.get_recommended_categories(AngerLevel.HIGH) == ["Casual", "Relaxing", "Sandbox", "Music", "Walking Sim"]
        assert engine.get_avoid_categories(AngerLevel.MILD) == engine.get_avoid_categories(AngerLevel.MILD)

    def test_unknown_level_defaults(self):
        assert AngerDetectionEngine.get_recommended_categories("UNKNOWN") == ["Casual", "Adventure"]
        assert AngerDetectionEngine.get_avoid_categories("UNKNOWN") == ["Competitive"]


class TestAngerScoreSerialization:
    """Test suite for AngerScore payload parsing."""

    def test_from_dict_derives_level(self):
        score = AngerScore.from_dict({"score": 72, "confidence": 0.9})
        assert score.level == AngerLevel.HIGH
        assert score.parameters.typing_speed == 40

    def test_from_dict_requires_score(self):
        with pytest.raises(ValueError, match="score requerido"):
            AngerScore.from_dict({"level": "HIGH"})

    def test_to_dict_wire_keys(self):
        result = AngerDetectionEngine(clock=lambda: NOW).calculate_anger_score(params(voice_tone=20))
        payload = result.to_dict()
        assert payload["level"] == result.level.value
        assert payload["parameters"]["voiceTone"] == 20
        assert payload["timestamp"] == NOW.isoformat()

    def test_from_dict_accepts_matching_level(self):
        score = AngerScore.from_dict({"score": 70, "level": "high", "confidence": 0.9})
        assert score.level == AngerLevel.HIGH

    def test_from_dict_rejects_level_that_contradicts_score(self):
        with pytest.raises(ValueError, match="no corresponde"):
            AngerScore.from_dict({"score": 95, "level": "CALM", "confidence": 1})

    def test_from_dict_rejects_non_finite_score(self):
        with pytest.raises(ValueError, match="score debe ser finito"):
            AngerScore.from_dict({"score": float("inf")})
