"""
Tests for zone standings.

Standings must prove:
1. Points and counters per team
2. Tiebreakers applied in priority order, name as the final key
3. Determinism regardless of input order
4. Defaults when no rules are available
"""

import pytest

from zonecup.services.rules_config import RulesConfig, TiebreakerRule
from zonecup.services.standings import MatchScore, TeamRef, compute_standings


def _rules(*enabled, **points):
    """RulesConfig with the given tiebreakers enabled in order."""
    all_ids = ["directResult", "goalDifference", "goalsFor", "matchesWon", "pointsCoefficient", "drawLot"]
    tiebreakers = [TiebreakerRule(id=key, priority=i + 1, enabled=True) for i, key in enumerate(enabled)]
    tiebreakers += [TiebreakerRule(id=key, priority=0, enabled=False) for key in all_ids if key not in enabled]
    return RulesConfig(tiebreakers=tiebreakers, **points)


TEAMS = [TeamRef("a", "A"), TeamRef("b", "B"), TeamRef("c", "C"), TeamRef("d", "D")]


def test_no_matches_ranks_by_name():
    teams = [TeamRef("z", "zulu"), TeamRef("a", "Alpha"), TeamRef("m", "mike")]
    standings = compute_standings(teams, [], _rules("goalDifference", "goalsFor"))

    assert [e.team_name for e in standings] == ["Alpha", "mike", "zulu"]
    assert [e.position for e in standings] == [1, 2, 3]
    assert all(e.points == 0 and e.played == 0 for e in standings)


def test_win_and_draw_counters():
    matches = [MatchScore("a", "b", 2, 1), MatchScore("b", "c", 1, 1)]
    standings = compute_standings(TEAMS[:3], matches, _rules("goalDifference", "goalsFor"))
    by_id = {e.team_id: e for e in standings}

    assert (by_id["a"].points, by_id["a"].played, by_id["a"].won) == (3, 1, 1)
    assert (by_id["b"].points, by_id["b"].played, by_id["b"].drawn, by_id["b"].lost) == (1, 2, 1, 1)
    assert (by_id["c"].points, by_id["c"].played, by_id["c"].drawn) == (1, 1, 1)
    assert by_id["b"].goals_for == 2 and by_id["b"].goals_against == 3 and by_id["b"].goal_difference == -1
    # C level on points with B but ahead on goal difference
    assert [e.team_id for e in standings] == ["a", "c", "b"]


def test_full_tie_falls_back_to_name():
    matches = [MatchScore("b", "c", 1, 1)]
    standings = compute_standings([TeamRef("c", "C"), TeamRef("b", "B")], matches, _rules("goalDifference", "goalsFor"))

    assert [e.team_name for e in standings] == ["B", "C"]


def test_custom_points():
    matches = [MatchScore("a", "b", 0, 1), MatchScore("c", "d", 2, 2)]
    standings = compute_standings(TEAMS, matches, _rules(points_for_win=2, points_for_draw=1, points_for_loss=1))
    by_id = {e.team_id: e for e in standings}

    assert by_id["b"].points == 2
    assert by_id["a"].points == 1
    assert by_id["c"].points == 1


def test_tiebreaker_priority_order():
    # a and b level on points; a has better goal difference, b scored more
    matches = [
        MatchScore("a", "c", 2, 0),
        MatchScore("b", "d", 4, 3),
        MatchScore("a", "d", 0, 0),
        MatchScore("b", "c", 0, 0),
    ]
    by_gd = compute_standings(TEAMS, matches, _rules("goalDifference", "goalsFor"))
    by_gf = compute_standings(TEAMS, matches, _rules("goalsFor", "goalDifference"))

    assert [e.team_id for e in by_gd][:2] == ["a", "b"]
    assert [e.team_id for e in by_gf][:2] == ["b", "a"]


def test_disabled_tiebreaker_ignored():
    matches = [MatchScore("b", "c", 3, 0), MatchScore("a", "d", 1, 0)]
    standings = compute_standings(TEAMS, matches, _rules())

    # Points only, then name
    assert [e.team_id for e in standings] == ["a", "b", "c", "d"]


def test_matches_won_tiebreaker():
    matches = [
        MatchScore("a", "c", 1, 0),
        MatchScore("a", "d", 0, 5),
        MatchScore("b", "c", 0, 0),
        MatchScore("b", "d", 0, 0),
        MatchScore("b", "a", 0, 0),
    ]
    rules = _rules("matchesWon", points_for_win=2, points_for_draw=1)
    standings = compute_standings(TEAMS, matches, rules)
    by_id = {e.team_id: e for e in standings}

    # a: W L D = 3 pts, b: D D D = 3 pts
    assert by_id["a"].points == by_id["b"].points == 3
    assert standings.index(by_id["a"]) < standings.index(by_id["b"])


def test_direct_result_cycle_falls_back_to_name():
    # a beats c, c beats b, b beats a: a three-way tie on every key
    matches = [
        MatchScore("b", "a", 1, 0),
        MatchScore("a", "c", 1, 0),
        MatchScore("c", "b", 1, 0),
    ]
    name_only = compute_standings(TEAMS[:3], matches, _rules())
    with_h2h = compute_standings(TEAMS[:3], matches, _rules("directResult"))

    assert [e.team_id for e in name_only] == ["a", "b", "c"]
    # head-to-head points among a, b, c are all 3, name decides
    assert [e.team_id for e in with_h2h] == ["a", "b", "c"]


def test_direct_result_only_counts_matches_among_tied_teams():
    matches = [
        MatchScore("b", "a", 1, 0),  # b beats a
        MatchScore("a", "c", 5, 0),
        MatchScore("a", "d", 0, 0),
        MatchScore("b", "d", 0, 1),
        MatchScore("b", "c", 0, 0),
    ]
    standings = compute_standings(TEAMS, matches, _rules("directResult", "goalDifference"))
    by_id = {e.team_id: e for e in standings}

    assert by_id["a"].points == by_id["b"].points == 4
    assert standings.index(by_id["b"]) < standings.index(by_id["a"])


def test_points_coefficient():
    matches = [
        MatchScore("a", "c", 1, 0),
        MatchScore("a", "d", 0, 0),
        MatchScore("a", "c", 0, 1),
        MatchScore("b", "d", 1, 0),
        MatchScore("b", "c", 0, 1),
    ]
    standings = compute_standings(TEAMS, matches, _rules("pointsCoefficient"))
    by_id = {e.team_id: e for e in standings}

    assert by_id["a"].points == 4 and by_id["a"].played == 3
    assert by_id["b"].points == 3 and by_id["b"].played == 2
    assert by_id["b"].points_coefficient == pytest.approx(1.5)
    assert by_id["d"].points_coefficient == pytest.approx(0.5)


def test_draw_lot_does_not_change_order():
    matches = [MatchScore("c", "d", 1, 1)]
    assert [e.team_id for e in compute_standings(TEAMS, matches, _rules("drawLot"))] == [
        e.team_id for e in compute_standings(TEAMS, matches, _rules())
    ]


def test_input_order_does_not_matter():
    matches = [
        MatchScore("a", "b", 1, 1),
        MatchScore("c", "d", 2, 0),
        MatchScore("a", "c", 0, 3),
        MatchScore("b", "d", 1, 0),
    ]
    rules = _rules("goalDifference", "goalsFor")
    forward = compute_standings(TEAMS, matches, rules)
    backward = compute_standings(list(reversed(TEAMS)), list(reversed(matches)), rules)

    assert forward == backward


def test_more_points_always_ranks_higher():
    matches = [
        MatchScore("d", "a", 1, 0),
        MatchScore("d", "b", 1, 0),
        MatchScore("c", "a", 9, 0),
        MatchScore("b", "c", 1, 0),
    ]
    standings = compute_standings(TEAMS, matches, _rules("goalDifference", "goalsFor"))
    points = [e.points for e in standings]
    assert points == sorted(points, reverse=True)
    assert standings[0].team_id == "d"


def test_default_rules_when_missing():
    matches = [MatchScore("a", "b", 2, 0)]
    standings = compute_standings(TEAMS[:2], matches, None)

    assert standings[0].team_id == "a"
    assert standings[0].points == 3


def test_case_insensitive_name_order():
    teams = [TeamRef("1", "beta"), TeamRef("2", "Alpha"), TeamRef("3", "alpha")]
    standings = compute_standings(teams, [], _rules())

    assert [e.team_id for e in standings] == ["2", "3", "1"]


def test_points_coefficient_breaks_points_tie():
    # a: 3 pts from one win, b: 3 pts from three draws
    matches = [
        MatchScore("a", "c", 2, 0),
        MatchScore("b", "c", 1, 1),
        MatchScore("b", "d", 0, 0),
        MatchScore("d", "b", 2, 2),
    ]
    teams = [TeamRef("b", "B"), TeamRef("a", "Z"), TeamRef("c", "C"), TeamRef("d", "D")]
    standings = compute_standings(teams, matches, _rules("pointsCoefficient"))
    by_id = {e.team_id: e for e in standings}

    assert by_id["a"].points == by_id["b"].points == 3
    # Name order alone would put B first
    assert standings.index(by_id["a"]) < standings.index(by_id["b"])
    name_only = compute_standings(teams, matches, _rules())
    assert name_only.index(next(e for e in name_only if e.team_id == "b")) < name_only.index(
        next(e for e in name_only if e.team_id == "a")
    )


@pytest.mark.parametrize("flip_index", [0, 1, 2, 3])
def test_turning_a_loss_into_a_win_never_lowers_position(flip_index):
    matches = [
        MatchScore("a", "b", 2, 0),
        MatchScore("c", "d", 1, 0),
        MatchScore("a", "c", 0, 1),
        MatchScore("b", "d", 3, 1),
        MatchScore("a", "d", 1, 1),
        MatchScore("b", "c", 0, 2),
    ]
    rules = _rules("goalDifference", "goalsFor")
    before = {e.team_id: e for e in compute_standings(TEAMS, matches, rules)}

    # Reverse the scoreline of one decided match so its loser wins
    decided = [m for m in matches if m.score1 != m.score2]
    target = decided[flip_index]
    loser = target.team2_id if target.score1 > target.score2 else target.team1_id
    flipped = [MatchScore(m.team1_id, m.team2_id, m.score2, m.score1) if m is target else m for m in matches]
    after = {e.team_id: e for e in compute_standings(TEAMS, flipped, rules)}

    assert after[loser].points > before[loser].points
    assert after[loser].position <= before[loser].position
