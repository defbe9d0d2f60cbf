"""
Tests for rules configuration validation and the stored rules row.
"""

import pytest
from pydantic import ValidationError

from zonecup.models.tournament_rules import SeedingStage
from zonecup.services.operation import PreconditionFailedError
from zonecup.services.rules_config import (
    DEFAULT_RULES,
    RulesConfig,
    RulesConfigError,
    parse_rules_config,
    validate_round_robin_type,
)
from zonecup.services.rules_store import (
    get_or_create_rules,
    load_rules_config,
    transition_stage,
    update_rules_config,
)


def test_defaults():
    assert (DEFAULT_RULES.points_for_win, DEFAULT_RULES.points_for_draw, DEFAULT_RULES.points_for_loss) == (3, 1, 0)
    assert DEFAULT_RULES.round_robin_type == "one-way"
    assert [tb.id for tb in DEFAULT_RULES.enabled_tiebreakers()] == ["goalDifference", "goalsFor"]


def test_camel_case_document_accepted():
    config = parse_rules_config(
        {
            "pointsForWin": 2,
            "pointsForDraw": 1,
            "pointsForLoss": 0,
            "roundRobinType": "two-way",
            "tiebreakers": [
                {"id": "goalsFor", "priority": 1, "enabled": True, "name": "Goals for"},
                {"id": "goalDifference", "priority": 2, "enabled": True},
                {"id": "drawLot", "priority": 0, "enabled": False},
            ],
            "groupsSeeded": False,
        }
    )

    assert config.points_for_win == 2
    assert config.round_robin_type == "two-way"
    assert [tb.id for tb in config.enabled_tiebreakers()] == ["goalsFor", "goalDifference"]
    assert config.to_document()["pointsForWin"] == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"points_for_win": -1},
        {"round_robin_type": "round-trip"},
        {"tiebreakers": [{"id": "goalsFor", "priority": 1, "enabled": True}, {"id": "goalsFor", "priority": 2, "enabled": True}]},
        {"tiebreakers": [{"id": "goalsFor", "priority": 1, "enabled": True}, {"id": "goalDifference", "priority": 1, "enabled": True}]},
        {"tiebreakers": [{"id": "goalsFor", "priority": 2, "enabled": True}]},
        {"tiebreakers": [{"id": "goalsFor", "priority": 3, "enabled": False}]},
        {"tiebreakers": [{"id": "coinToss", "priority": 1, "enabled": True}]},
    ],
)
def test_invalid_configs_rejected(overrides):
    with pytest.raises(RulesConfigError):
        parse_rules_config(overrides)


def test_rules_config_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_RULES.points_for_win = 5


def test_validate_round_robin_type():
    assert validate_round_robin_type("two-way") == "two-way"
    with pytest.raises(RulesConfigError):
        validate_round_robin_type("")


def test_rules_row_created_with_defaults(session):
    rules = get_or_create_rules(session)
    session.commit()

    assert rules.stage == SeedingStage.unseeded
    assert not rules.groups_seeded
    assert load_rules_config(session) == DEFAULT_RULES


def test_update_rules(session):
    config = RulesConfig(points_for_win=2, round_robin_type="two-way")
    result = update_rules_config(session, config)

    assert result.success
    assert load_rules_config(session).points_for_win == 2
    assert load_rules_config(session).round_robin_type == "two-way"


def test_update_rules_rejected_while_seeded(session):
    rules = get_or_create_rules(session)
    transition_stage(rules, SeedingStage.seeded)
    session.add(rules)
    session.commit()

    result = update_rules_config(session, RulesConfig(points_for_win=5))

    assert not result.success
    assert result.code == "precondition_failed"
    assert load_rules_config(session).points_for_win == 3


def test_stage_transitions(session):
    rules = get_or_create_rules(session)

    with pytest.raises(PreconditionFailedError):
        transition_stage(rules, SeedingStage.unseeded)

    transition_stage(rules, SeedingStage.seeded)
    assert rules.groups_seeded
    assert rules.groups_seeded_at is not None

    with pytest.raises(PreconditionFailedError):
        transition_stage(rules, SeedingStage.seeded)

    transition_stage(rules, SeedingStage.unseeded)
    assert not rules.groups_seeded
    assert rules.groups_seeded_at is None
