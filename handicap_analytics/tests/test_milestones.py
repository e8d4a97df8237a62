from __future__ import annotations

import math

import pytest

from handicap_analytics.scoring.milestones import (
    best_and_worst_rounds,
    consistency_score,
    count_goals,
    find_firsts,
    summarize_rounds,
)
from handicap_analytics.scoring.rounds import aggregate_rounds


@pytest.fixture
def rounds(make_round, round_to_par):
    nine = [4] * 9
    nine[4] = 3
    records = (
        round_to_par("even", "2024-01-01", 0)
        + round_to_par("bogey", "2024-02-01", 18)
        + make_round("back", "2024-03-01", nine, tee_name="White (Back 9)")
    )
    return aggregate_rounds(records)


def _by_id(rounds, round_id):
    return next(r for r in rounds if r.round_id == round_id)


def test_summary_uses_18_hole_equivalents(rounds) -> None:
    summary = summarize_rounds(rounds)

    assert summary is not None
    assert summary.rounds == 3
    assert summary.rounds_9 == 1
    assert summary.rounds_18 == 2
    assert summary.gross_avg == pytest.approx((0 + 18 - 2) / 3)
    expected_sd = math.sqrt(sum((v - 16 / 3) ** 2 for v in (0, 18, -2)) / 3)
    assert summary.gross_sd == pytest.approx(expected_sd)
    assert summary.net_avg is None
    assert summary.net_sd is None
    assert summary.consistency == consistency_score(expected_sd, None)
    assert summary.total_birdies == 1


def test_summary_of_nothing() -> None:
    assert summarize_rounds([]) is None


def test_consistency_score() -> None:
    assert consistency_score(3.0, 4.0) == pytest.approx(3.5)
    assert consistency_score(None, 2.04) == 2.0
    assert consistency_score(None, None) is None


def test_best_and_worst_keep_nine_and_eighteen_apart(rounds) -> None:
    extremes = best_and_worst_rounds(rounds)

    assert extremes.best_18_gross is _by_id(rounds, "even")
    assert extremes.worst_18_gross is _by_id(rounds, "bogey")
    assert extremes.best_9_gross is _by_id(rounds, "back")
    assert extremes.worst_9_gross is _by_id(rounds, "back")
    assert extremes.best_18_net is None


def test_firsts(rounds) -> None:
    firsts = find_firsts(rounds)

    assert firsts.first_round.round_id == "even"
    assert firsts.first_birdie.round_id == "back"
    assert firsts.first_eagle is None
    assert firsts.birdie_100 is None


def test_birdie_100_is_the_round_that_reaches_it(make_round) -> None:
    records = []
    for i in range(12):
        records += make_round(f"r{i:02d}", f"2024-01-{i + 1:02d}", [3] * 9)
    firsts = find_firsts(aggregate_rounds(records))

    # 9 birdies per round: the 12th round takes the total from 99 to 108.
    assert firsts.birdie_100.round_id == "r11"
    assert firsts.first_3_birdies.round_id == "r00"


def test_goals(rounds) -> None:
    goals = count_goals(rounds)

    assert goals.rounds == 3
    assert goals.par_or_better_18eq == 2
    assert goals.break_100 == 2
    assert goals.break_90 == 1
    assert goals.break_80 == 1
    assert goals.birdie_rounds == 1
    assert goals.eagle_rounds == 0
