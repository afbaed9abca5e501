"""Delivery-personnel leaderboard."""

from __future__ import annotations

from typing import Iterable, List

from modules.dashboard.dtos import LeaderboardEntry
from modules.users.dtos import PersonRecord


class LeaderboardRanker:
    """Ranks delivery personnel by ``shipping_score``, highest first.

    Ties are broken by id so the result never depends on input order.
    People without a numeric score are left out.
    """

    def rank(self, people: Iterable[PersonRecord], k: int = 3) -> List[LeaderboardEntry]:
        if k < 0:
            raise ValueError(f"Leaderboard size must be >= 0, got {k}.")

        scored = [p for p in people if p.shipping_score is not None]
        scored.sort(key=lambda p: (-p.shipping_score, p.id))
        return [
            LeaderboardEntry(
                rank=position,
                id=person.id,
                name=person.full_name,
                photo_url=person.photo_url,
                shipping_score=person.shipping_score,
            )
            for position, person in enumerate(scored[:k], start=1)
        ]
