"""
Stored tournament rules and the group-stage seed state.

The seed state is a two-state machine on the TournamentRules row:

    unseeded --(seed_group_stage)--> seeded --(reset_groups)--> unseeded

transition_stage() is the only writer of TournamentRules.stage.
"""

import logging
from datetime import datetime

from sqlmodel import Session

from zonecup.models.tournament_rules import RULES_ROW_ID, SeedingStage, TournamentRules
from zonecup.services.operation import OperationResult, PreconditionFailedError, TournamentOperationError
from zonecup.services.rules_config import RulesConfig, default_tiebreakers, parse_rules_config

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS = {
    (SeedingStage.unseeded, SeedingStage.seeded),
    (SeedingStage.seeded, SeedingStage.unseeded),
}


def get_or_create_rules(session: Session) -> TournamentRules:
    """
    Load the rules row, staging a default one if missing.
    Does not commit; the calling operation owns the transaction.
    """
    rules = session.get(TournamentRules, RULES_ROW_ID)
    if rules is None:
        rules = TournamentRules(
            id=RULES_ROW_ID,
            tiebreakers=[tb.model_dump() for tb in default_tiebreakers()],
        )
        session.add(rules)
        session.flush()
        logger.info("Created default tournament rules")
    return rules


def rules_config_from_row(rules: TournamentRules) -> RulesConfig:
    """Validate the stored row into a RulesConfig (raises RulesConfigError)."""
    return parse_rules_config(
        {
            "points_for_win": rules.points_for_win,
            "points_for_draw": rules.points_for_draw,
            "points_for_loss": rules.points_for_loss,
            "round_robin_type": rules.round_robin_type,
            "tiebreakers": rules.tiebreakers,
        }
    )


def load_rules_config(session: Session) -> RulesConfig:
    return rules_config_from_row(get_or_create_rules(session))


def transition_stage(rules: TournamentRules, target: SeedingStage) -> None:
    """Move the seed state machine; raises PreconditionFailedError on an illegal transition."""
    current = SeedingStage(rules.stage)
    if (current, target) not in _ALLOWED_TRANSITIONS:
        raise PreconditionFailedError(f"Cannot change seed state from '{current.value}' to '{target.value}'")

    rules.stage = target
    rules.groups_seeded_at = datetime.utcnow() if target == SeedingStage.seeded else None
    rules.updated_at = datetime.utcnow()


def update_rules_config(session: Session, config: RulesConfig) -> OperationResult:
    """Replace the stored rules. Rejected while the group stage is seeded."""
    try:
        rules = get_or_create_rules(session)
        if rules.groups_seeded:
            raise PreconditionFailedError(
                "Tournament rules are frozen while the group stage is seeded. Reset the groups to edit them."
            )

        rules.points_for_win = config.points_for_win
        rules.points_for_draw = config.points_for_draw
        rules.points_for_loss = config.points_for_loss
        rules.round_robin_type = config.round_robin_type
        rules.tiebreakers = [tb.model_dump() for tb in config.tiebreakers]
        rules.updated_at = datetime.utcnow()
        session.add(rules)
        session.commit()
    except TournamentOperationError as e:
        session.rollback()
        return OperationResult.failed(e)

    logger.info("Tournament rules updated (round robin: %s)", config.round_robin_type)
    return OperationResult.ok("Tournament rules saved.")
