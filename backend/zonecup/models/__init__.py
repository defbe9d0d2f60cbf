from zonecup.models.match import Match
from zonecup.models.playoff_fixture import PlayoffFixture
from zonecup.models.team import Team
from zonecup.models.tournament_rules import SeedingStage, TournamentRules
from zonecup.models.zone import Zone

__all__ = [
    "Match",
    "PlayoffFixture",
    "SeedingStage",
    "Team",
    "TournamentRules",
    "Zone",
]
