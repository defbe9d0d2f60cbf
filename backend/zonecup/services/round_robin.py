"""
Round Robin Fixture Generation

Circle method:
1. Pad odd team counts with a BYE slot so the count n is even
2. Team at position 0 is the fixed pivot
3. Matchday d pairs position i with position n-1-i; pairs touching BYE are dropped
4. Rotate: move the last slot to position 1
5. Two-way mode mirrors every pairing (teams swapped) at matchday + (n-1)
"""

from dataclasses import dataclass
from typing import List, Sequence, Union

from zonecup.services.rules_config import ROUND_ROBIN_TWO_WAY, validate_round_robin_type


class _ByeSlot:
    """Empty schedule slot for odd team counts. Never equal to a team id."""

    def __repr__(self) -> str:
        return "BYE"


BYE = _ByeSlot()

Slot = Union[str, _ByeSlot]


@dataclass(frozen=True)
class ScheduledPairing:
    team1_id: str  # home
    team2_id: str  # away
    matchday: int  # 1-based


def round_robin_matchday_count(team_count: int) -> int:
    """Matchdays in one leg: n-1 for even n, n for odd n (one BYE per day)."""
    if team_count < 2:
        return 0
    padded = team_count + 1 if team_count % 2 == 1 else team_count
    return padded - 1


def _circle_pairings(slots: List[Slot]) -> List[ScheduledPairing]:
    n = len(slots)
    result: List[ScheduledPairing] = []

    for day in range(n - 1):
        for i in range(n // 2):
            home = slots[i]
            away = slots[n - 1 - i]
            if home is BYE or away is BYE:
                continue
            result.append(ScheduledPairing(team1_id=home, team2_id=away, matchday=day + 1))
        # Keep the pivot, move the last slot to index 1
        slots = [slots[0], slots[-1]] + slots[1:-1]

    return result


def generate_round_robin(team_ids: Sequence[str], mode: str) -> List[ScheduledPairing]:
    """
    Generate the fixture list for one zone.

    Args:
        team_ids: Team ids of the zone (order decides the rotation, not fairness)
        mode: "one-way" or "two-way"

    Returns:
        Pairings ordered by matchday, then by pairing position.
        One-way: every unordered pair once. Two-way: every pair twice, venues swapped.

    Raises:
        RulesConfigError: mode is not a known round-robin type
        ValueError: a team id is listed twice
    """
    validate_round_robin_type(mode)

    if len(set(team_ids)) != len(team_ids):
        raise ValueError("team_ids must be unique")
    if len(team_ids) < 2:
        return []

    slots: List[Slot] = list(team_ids)
    if len(slots) % 2 == 1:
        slots.append(BYE)

    first_leg = _circle_pairings(slots)
    if mode != ROUND_ROBIN_TWO_WAY:
        return first_leg

    offset = len(slots) - 1
    second_leg = [
        ScheduledPairing(team1_id=p.team2_id, team2_id=p.team1_id, matchday=p.matchday + offset) for p in first_leg
    ]
    return first_leg + second_leg
