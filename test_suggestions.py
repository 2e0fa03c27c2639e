"""
Tests for the suggestion engine
"""
from mycore.models.habit import Habit, InterestType
from mycore.services.habits.suggestions import SUGGESTED_HABITS, suggest


def test_health_interest_backfills_to_five():
    result = suggest([InterestType.HEALTH])
    assert len(result) == 5
    assert result[0].id == "h1"
    assert [h.id for h in result[1:]] == ["h2", "h3", "h4", "h5"]
    assert len({h.id for h in result}) == 5


def test_matches_keep_catalog_order():
    result = suggest([InterestType.LEARNING, InterestType.FINANCE])
    assert [h.id for h in result[:2]] == ["h2", "h4"]


def test_no_interests_returns_catalog_head():
    assert [h.id for h in suggest([])] == ["h1", "h2", "h3", "h4", "h5"]


def test_truncates_to_target():
    catalog = [Habit(id=f"x{i}", name=f"x{i}", interest=InterestType.HEALTH) for i in range(8)]
    result = suggest([InterestType.HEALTH], catalog=catalog, target_count=5)
    assert [h.id for h in result] == ["x0", "x1", "x2", "x3", "x4"]


def test_small_catalog_is_exhausted():
    result = suggest([InterestType.DETOX], catalog=SUGGESTED_HABITS[:3], target_count=5)
    assert [h.id for h in result] == ["h3", "h1", "h2"]


def test_returns_copies():
    result = suggest([InterestType.HEALTH])
    result[0].name = "changed"
    assert SUGGESTED_HABITS[0].name == "Morning Run (Gym)"
