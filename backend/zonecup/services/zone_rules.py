"""
Zone Rules: Tournament Shape (Single Source of Truth)

Fixed zone layout and the thresholds used by assignment, seeding and playoffs.
All other modules must import from here. Do NOT duplicate these values elsewhere.
"""

from string import ascii_lowercase
from typing import List, Tuple

TOTAL_ZONES = 8
TEAMS_PER_ZONE = 4

# Zones with exactly TEAMS_PER_ZONE teams are seedable;
# seeding needs at least this many of them.
MIN_ZONES_FOR_SEED = 2

# Top positions per zone that enter the zone bracket
PLAYOFF_QUALIFIERS_PER_ZONE = 4


def zone_id_for_index(index: int) -> str:
    """0 -> "zona-a", 1 -> "zona-b", ..."""
    return f"zona-{ascii_lowercase[index]}"


def zone_name_for_index(index: int) -> str:
    """0 -> "Zona A", 1 -> "Zona B", ..."""
    return f"Zona {ascii_lowercase[index].upper()}"


def default_zone_layout() -> List[Tuple[str, str]]:
    """(zone_id, zone_name) for every zone, in display order."""
    return [(zone_id_for_index(i), zone_name_for_index(i)) for i in range(TOTAL_ZONES)]
