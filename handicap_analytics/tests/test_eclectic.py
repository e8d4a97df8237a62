from __future__ import annotations

from handicap_analytics.scoring.eclectic import (
    CourseRecord,
    ScoreOnDate,
    course_records,
    eclectic_scorecard,
    is_complete_round,
    sort_course_records,
)
from handicap_analytics.scoring.rounds import aggregate_rounds


def test_eclectic_keeps_best_per_hole(make_round) -> None:
    first = [5, 4, 6, 4, 3, 5, 4, 4, 5] * 2
    second = [4, 5, 4, 5, 4, 4, 6, 3, 4] * 2
    records = make_round("a", "2024-01-01", first) + make_round("b", "2024-02-01", second)

    card = eclectic_scorecard(records, "c1", "t1")

    expected = [min(x, y) for x, y in zip(first, second)]
    assert card.holes == list(range(1, 19))
    assert [card.best_by_hole[h].strokes for h in range(1, 19)] == expected
    assert card.summary.complete is True
    assert card.summary.total == sum(expected)
    assert card.summary.total <= min(sum(first), sum(second))
    assert card.best_by_hole[1].par == 4


def test_eclectic_merges_front_and_back_nine_snapshots(make_round) -> None:
    records = make_round(
        "front", "2024-01-01", [4] * 9, tee_name="White (Front 9)"
    ) + make_round("back", "2024-01-08", [5] * 9, tee_name="White (Back 9)")

    card = eclectic_scorecard(records, "c1", "t1")

    assert card.holes == list(range(1, 19))
    assert card.best_by_hole[12].strokes == 5
    assert card.summary.total == 9 * 4 + 9 * 5


def test_eclectic_reports_missing_holes(make_round) -> None:
    records = make_round("a", "2024-01-01", [4] * 17)

    card = eclectic_scorecard(records, "c1", "t1")

    assert card.summary.missing == [18]
    assert card.summary.have == 17
    assert card.summary.holes == 18
    assert card.summary.total is None
    assert card.summary.complete is False


def test_eclectic_nine_hole_layout(make_round) -> None:
    card = eclectic_scorecard(make_round("a", "2024-01-01", [4] * 9), "c1", "t1")
    assert card.summary.holes == 9
    assert card.summary.total == 36


def test_eclectic_tie_keeps_first_record(make_round) -> None:
    records = make_round("a", "2024-01-01", [4]) + make_round("b", "2024-02-01", [4])
    card = eclectic_scorecard(records, "c1", "t1", expected_holes=[1])

    assert card.best_by_hole[1].played_at.month == 1
    assert card.summary.total == 4


def test_eclectic_filters_course_tee_and_profile(make_round) -> None:
    records = (
        make_round("a", "2024-01-01", [6] * 9)
        + make_round("b", "2024-01-02", [3] * 9, course_id="other")
        + make_round("c", "2024-01-03", [3] * 9, tee_box_id="t2")
        + make_round("d", "2024-01-04", [3] * 9, profile_id="p2")
    )

    card = eclectic_scorecard(records, "c1", "t1", profile_id="p1")

    assert card.summary.total == 54


def test_eclectic_empty() -> None:
    card = eclectic_scorecard([], "c1", "t1")
    assert card.holes == []
    assert card.summary.total is None
    assert card.summary.missing == list(range(1, 10))


def test_course_records_best_gross_needs_complete_round(make_round) -> None:
    records = (
        make_round("full", "2024-01-01", [5] * 18)
        + make_round("partial", "2024-01-02", [4] * 10)
        + make_round("net", "2024-01-03", [6] * 18, course_handicap=36)
    )
    rounds = aggregate_rounds(records)
    partial = next(r for r in rounds if r.round_id == "partial")
    assert not is_complete_round(partial)

    [record] = course_records(rounds)

    assert record.rounds == 3
    assert record.par_total == 72
    assert record.best_gross.score == 90
    assert record.best_net.score == 72
    assert record.course_name == "Links"
    assert record.tee_name == "White"


def test_course_records_group_by_course_and_tee(make_round) -> None:
    records = make_round("a", "2024-01-01", [4] * 18) + make_round(
        "b", "2024-01-02", [4] * 18, tee_box_id="t2", tee_name="Blue"
    )
    found = course_records(aggregate_rounds(records))
    assert sorted((r.course_id, r.tee_box_id) for r in found) == [("c1", "t1"), ("c1", "t2")]


def _record(name: str, par_total, gross):
    return CourseRecord(
        course_id=name,
        tee_box_id="t",
        course_name=name,
        tee_name="White",
        par_total=par_total,
        rounds=1,
        best_gross=ScoreOnDate(score=gross) if gross is not None else None,
    )


def test_sort_course_records_by_score_to_par() -> None:
    records = [
        _record("a", 72, 80),
        _record("b", 70, 75),
        _record("c", 72, None),
        _record("d", 71, 90),
    ]

    ascending = sort_course_records(records)
    descending = sort_course_records(records, descending=True)

    assert [r.course_id for r in ascending] == ["b", "a", "d", "c"]
    assert [r.course_id for r in descending] == ["d", "a", "b", "c"]


def test_course_records_ignore_partly_scored_round(make_round) -> None:
    records = make_round("full", "2024-01-01", [5] * 18) + make_round(
        "partial", "2024-01-02", [4] * 9 + [None] * 9
    )
    rounds = aggregate_rounds(records)
    partial = next(r for r in rounds if r.round_id == "partial")
    assert partial.unique_holes_scored == 9

    [record] = course_records(rounds)

    assert record.best_gross.score == 90
    assert record.par_total == 72


def test_nine_hole_tee_box_keeps_nine_hole_records(make_round) -> None:
    records = make_round("a", "2024-01-01", [5] * 9) + make_round(
        "b", "2024-01-08", [4] * 9
    )
    [record] = course_records(aggregate_rounds(records))

    assert record.best_gross.score == 36
    assert record.par_total == 36


def test_is_complete_round_with_expected_layout(make_round) -> None:
    [nine] = aggregate_rounds(make_round("a", "2024-01-01", [5] * 9))
    assert is_complete_round(nine)
    assert not is_complete_round(nine, expected=18)
