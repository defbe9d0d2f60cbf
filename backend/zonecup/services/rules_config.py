"""
Tournament rules configuration: points per result, round-robin mode and
ordered tiebreaker criteria.

Validated once at the edge (request body or stored row); business logic only
ever sees a valid, immutable RulesConfig.
"""

from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

RoundRobinType = Literal["one-way", "two-way"]
ROUND_ROBIN_ONE_WAY = "one-way"
ROUND_ROBIN_TWO_WAY = "two-way"
ROUND_ROBIN_TYPES = (ROUND_ROBIN_ONE_WAY, ROUND_ROBIN_TWO_WAY)

TiebreakerCriterion = Literal[
    "directResult",
    "goalDifference",
    "goalsFor",
    "matchesWon",
    "pointsCoefficient",
    "drawLot",
]

TIEBREAKER_NAMES: Dict[str, str] = {
    "directResult": "Head-to-head result (between tied teams)",
    "goalDifference": "Goal difference",
    "goalsFor": "Goals for",
    "matchesWon": "Matches won",
    "pointsCoefficient": "Points coefficient (points / played)",
    "drawLot": "Drawing of lots",
}


class RulesConfigError(ValueError):
    """Invalid rules configuration (rejected before any computation)"""

    pass


class TiebreakerRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: TiebreakerCriterion
    priority: int = Field(ge=0)
    enabled: bool
    name: Optional[str] = None


def default_tiebreakers() -> List[TiebreakerRule]:
    """goalDifference, then goalsFor; every other criterion disabled."""
    enabled = ["goalDifference", "goalsFor"]
    rules = [TiebreakerRule(id=key, priority=i + 1, enabled=True, name=TIEBREAKER_NAMES[key]) for i, key in enumerate(enabled)]
    for key, name in TIEBREAKER_NAMES.items():
        if key not in enabled:
            rules.append(TiebreakerRule(id=key, priority=0, enabled=False, name=name))
    return rules


class RulesConfig(BaseModel):
    """
    Accepts both snake_case and the camelCase document shape
    (pointsForWin, roundRobinType, ...). Unknown keys such as groupsSeeded
    are ignored; the seed state lives on the TournamentRules row.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    points_for_win: int = Field(default=3, ge=0)
    points_for_draw: int = Field(default=1, ge=0)
    points_for_loss: int = Field(default=0, ge=0)
    round_robin_type: RoundRobinType = ROUND_ROBIN_ONE_WAY
    tiebreakers: List[TiebreakerRule] = Field(default_factory=default_tiebreakers)

    @field_validator("tiebreakers")
    @classmethod
    def validate_tiebreakers(cls, v: List[TiebreakerRule]) -> List[TiebreakerRule]:
        ids = [tb.id for tb in v]
        if len(set(ids)) != len(ids):
            raise ValueError("each tiebreaker criterion may appear only once")

        for tb in v:
            if not tb.enabled and tb.priority != 0:
                raise ValueError(f"disabled tiebreaker '{tb.id}' must have priority 0")

        priorities = sorted(tb.priority for tb in v if tb.enabled)
        if priorities != list(range(1, len(priorities) + 1)):
            raise ValueError(
                "enabled tiebreaker priorities must be unique and sequential starting at 1 "
                f"(got {priorities})"
            )
        return v

    def enabled_tiebreakers(self) -> List[TiebreakerRule]:
        """Enabled criteria in priority order."""
        return sorted((tb for tb in self.tiebreakers if tb.enabled), key=lambda tb: tb.priority)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


DEFAULT_RULES = RulesConfig()


def parse_rules_config(data: Mapping[str, Any]) -> RulesConfig:
    """Validate a raw mapping into a RulesConfig, raising RulesConfigError on failure."""
    try:
        return RulesConfig.model_validate(dict(data))
    except ValidationError as e:
        raise RulesConfigError(_format_validation_error(e)) from e


def validate_round_robin_type(mode: str) -> str:
    if mode not in ROUND_ROBIN_TYPES:
        raise RulesConfigError(f"Invalid round-robin mode '{mode}'. Expected one of: {', '.join(ROUND_ROBIN_TYPES)}")
    return mode


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "; ".join(parts)
