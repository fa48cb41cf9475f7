"""Tests for points, levels and badges."""
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from campus_assistant.core.storage import InMemoryStore
from campus_assistant.engines.gamification_engine import (
    GamificationState,
    GamificationTracker,
    badges_for,
)


class TestBadges:
    """Threshold badge rules."""

    def test_first_query(self):
        assert badges_for(5, []) == ["First Query"]

    def test_nothing_below_first_threshold(self):
        assert badges_for(4, []) == []

    def test_exact_threshold_adds_next_badge(self):
        assert badges_for(50, ["First Query"]) == ["Regular User"]

    def test_jump_grants_all_crossed_badges_in_order(self):
        assert badges_for(250, []) == ["First Query", "Regular User", "Power User", "Campus Expert"]

    @pytest.mark.parametrize("points,level", [(0, 1), (999, 1), (1000, 2), (2500, 3)])
    def test_level(self, points, level):
        assert GamificationState(points=points).level == level

    def test_next_badge(self):
        state = GamificationState(points=30, badges=["First Query"])
        assert state.next_badge == {"name": "Regular User", "points_required": 50, "points_remaining": 20}

    def test_no_next_badge_when_all_earned(self):
        state = GamificationState(
            points=300, badges=["First Query", "Regular User", "Power User", "Campus Expert"]
        )
        assert state.next_badge is None


class TestTracker:
    """Persistence through the key-value store."""

    @pytest.mark.asyncio
    async def test_first_award(self, memory_store):
        tracker = GamificationTracker(memory_store)

        state = await tracker.award(5)

        assert state.points == 5
        assert state.badges == ["First Query"]
        assert state.new_badges == ["First Query"]
        assert await memory_store.get("guest:gamePoints") == "5"
        assert await memory_store.get_json("guest:gameBadges") == ["First Query"]

    @pytest.mark.asyncio
    async def test_reaching_fifty_keeps_earlier_badges(self, memory_store):
        tracker = GamificationTracker(memory_store)
        await tracker.award(45)

        state = await tracker.award(5)

        assert state.points == 50
        assert state.badges == ["First Query", "Regular User"]
        assert state.new_badges == ["Regular User"]

    @pytest.mark.asyncio
    async def test_zero_award_changes_nothing(self, memory_store):
        tracker = GamificationTracker(memory_store)
        await tracker.award(10)

        state = await tracker.award(0)

        assert state.points == 10
        assert state.new_badges == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [-1, 2.5, "10", True])
    async def test_invalid_amount_rejected(self, memory_store, amount):
        tracker = GamificationTracker(memory_store)
        with pytest.raises(ValueError):
            await tracker.award(amount)
        assert await memory_store.get("guest:gamePoints") is None

    @pytest.mark.asyncio
    async def test_users_are_scoped(self, memory_store):
        alice = GamificationTracker(memory_store, user_key="user:alice")
        bob = GamificationTracker(memory_store, user_key="user:bob")

        await alice.award(60)

        assert (await alice.load()).points == 60
        assert (await bob.load()).points == 0

    @pytest.mark.asyncio
    async def test_corrupt_stored_values_reset(self, memory_store):
        await memory_store.set("guest:gamePoints", "lots")
        await memory_store.set("guest:gameBadges", '["First Query", "First Query", 7]')

        state = await GamificationTracker(memory_store).load()

        assert state.points == 0
        assert state.badges == ["First Query"]

    @given(st.lists(st.integers(min_value=0, max_value=120), max_size=15))
    @settings(max_examples=30)
    def test_points_and_badges_never_shrink(self, amounts):
        import asyncio

        async def run():
            tracker = GamificationTracker(InMemoryStore())
            previous = await tracker.load()
            for amount in amounts:
                state = await tracker.award(amount)
                assert state.points >= previous.points
                assert set(previous.badges) <= set(state.badges)
                previous = state

        asyncio.run(run())
