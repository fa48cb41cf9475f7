"""
Gamification Engine - points and threshold badges

Points only grow; a badge, once granted, is never removed. Each award is a
read-modify-write on the store without locking, so two concurrent awards for
the same user may race (last write wins).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from campus_assistant.core.storage import KeyValueStore
from campus_assistant.utils.logging_utils import get_logger, log_audit

logger = get_logger()

# Ascending (threshold, badge name)
BADGE_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (5, "First Query"),
    (50, "Regular User"),
    (100, "Power User"),
    (200, "Campus Expert"),
)

POINTS_PER_LEVEL = 1000


@dataclass
class GamificationState:
    points: int = 0
    badges: List[str] = field(default_factory=list)
    new_badges: List[str] = field(default_factory=list)
    points_per_level: int = POINTS_PER_LEVEL

    @property
    def level(self) -> int:
        return self.points // self.points_per_level + 1

    @property
    def next_badge(self) -> Optional[Dict[str, Any]]:
        for threshold, name in BADGE_THRESHOLDS:
            if name not in self.badges:
                return {"name": name, "points_required": threshold, "points_remaining": max(0, threshold - self.points)}
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": self.points,
            "badges": list(self.badges),
            "new_badges": list(self.new_badges),
            "level": self.level,
            "next_badge": self.next_badge,
        }


def badges_for(points: int, current: List[str]) -> List[str]:
    """Badge names newly crossed at `points`, in ascending threshold order."""
    return [name for threshold, name in BADGE_THRESHOLDS if points >= threshold and name not in current]


class GamificationTracker:
    def __init__(self, store: KeyValueStore, user_key: str = "guest", points_per_level: int = POINTS_PER_LEVEL):
        self.store = store
        self.user_key = user_key
        self.points_per_level = max(1, points_per_level)

    @property
    def points_key(self) -> str:
        return f"{self.user_key}:gamePoints"

    @property
    def badges_key(self) -> str:
        return f"{self.user_key}:gameBadges"

    async def load(self) -> GamificationState:
        raw_points = await self.store.get(self.points_key)
        try:
            points = max(0, int(raw_points)) if raw_points is not None else 0
        except (TypeError, ValueError):
            logger.warning(f"[Gamification] Invalid stored points for {self.user_key}: {raw_points!r}")
            points = 0

        stored_badges = await self.store.get_json(self.badges_key, default=[])
        badges: List[str] = []
        if isinstance(stored_badges, list):
            for name in stored_badges:
                if isinstance(name, str) and name not in badges:
                    badges.append(name)
        return GamificationState(points=points, badges=badges, points_per_level=self.points_per_level)

    async def award(self, amount: int) -> GamificationState:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError("award amount must be an integer")
        if amount < 0:
            raise ValueError("award amount must be non-negative")

        state = await self.load()
        points = state.points + amount
        new_badges = badges_for(points, state.badges)
        badges = state.badges + new_badges

        await self.store.set(self.points_key, str(points))
        await self.store.set_json(self.badges_key, badges)

        if new_badges:
            log_audit("badge_unlocked", self.user_key, ", ".join(new_badges))
        return GamificationState(
            points=points,
            badges=badges,
            new_badges=new_badges,
            points_per_level=self.points_per_level,
        )
