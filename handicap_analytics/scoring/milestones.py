"""Round-level summaries: averages, best/worst rounds, firsts and goals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional

from ..utils.numbers import mean, rms, round1, stdev
from .models import RoundAggregate
from .rounds import rounds_ascending

Direction = Literal["best", "worst"]


@dataclass
class ScoringSummary:
    rounds: int
    rounds_9: int
    rounds_18: int
    gross_avg: float | None
    net_avg: float | None
    gross_sd: float | None
    net_sd: float | None
    consistency: float | None
    total_birdies: int
    total_eagles: int
    total_albatrosses: int
    total_holes_in_one: int


@dataclass
class BestWorstRounds:
    best_9_gross: Optional[RoundAggregate]
    worst_9_gross: Optional[RoundAggregate]
    best_18_gross: Optional[RoundAggregate]
    worst_18_gross: Optional[RoundAggregate]
    best_9_net: Optional[RoundAggregate]
    worst_9_net: Optional[RoundAggregate]
    best_18_net: Optional[RoundAggregate]
    worst_18_net: Optional[RoundAggregate]


@dataclass
class Firsts:
    first_round: Optional[RoundAggregate]
    first_birdie: Optional[RoundAggregate]
    first_eagle: Optional[RoundAggregate]
    first_albatross: Optional[RoundAggregate]
    first_hole_in_one: Optional[RoundAggregate]
    first_3_birdies: Optional[RoundAggregate]
    first_5_birdies: Optional[RoundAggregate]
    birdie_100: Optional[RoundAggregate]
    eagle_25: Optional[RoundAggregate]


@dataclass
class Goals:
    rounds: int
    par_or_better_18eq: int
    break_100: int
    break_90: int
    break_80: int
    birdie_rounds: int
    eagle_rounds: int
    hole_in_one_rounds: int


def consistency_score(gross_sd: float | None, net_sd: float | None) -> float | None:
    """RMS of gross and net SD, or whichever one exists."""

    if gross_sd is not None and net_sd is not None:
        return round1(rms(gross_sd, net_sd))
    if gross_sd is not None:
        return round1(gross_sd)
    if net_sd is not None:
        return round1(net_sd)
    return None


def summarize_rounds(rounds: Iterable[RoundAggregate]) -> ScoringSummary | None:
    items = list(rounds)
    if not items:
        return None

    gross_values = [r.gross_to_par_18eq for r in items if r.gross_to_par_18eq is not None]
    net_values = [r.net_to_par_18eq for r in items if r.net_to_par_18eq is not None]

    gross_sd = stdev(gross_values)
    net_sd = stdev(net_values)

    return ScoringSummary(
        rounds=len(items),
        rounds_9=sum(1 for r in items if r.is_9_hole),
        rounds_18=sum(1 for r in items if not r.is_9_hole),
        gross_avg=mean(gross_values),
        net_avg=mean(net_values),
        gross_sd=gross_sd,
        net_sd=net_sd,
        consistency=consistency_score(gross_sd, net_sd),
        total_birdies=sum(r.birdies for r in items),
        total_eagles=sum(r.eagles for r in items),
        total_albatrosses=sum(r.albatrosses for r in items),
        total_holes_in_one=sum(r.holes_in_one for r in items),
    )


def _pick(
    rounds: List[RoundAggregate], attr: str, direction: Direction
) -> RoundAggregate | None:
    usable = [r for r in rounds if getattr(r, attr) is not None]
    if not usable:
        return None
    if direction == "best":
        return min(usable, key=lambda r: getattr(r, attr))
    return max(usable, key=lambda r: getattr(r, attr))


def best_and_worst_rounds(rounds: Iterable[RoundAggregate]) -> BestWorstRounds:
    """Single-round extremes on raw to-par; 9- and 18-hole pools never mix."""

    items = list(rounds)
    nine = [r for r in items if r.is_9_hole]
    eighteen = [r for r in items if not r.is_9_hole]

    return BestWorstRounds(
        best_9_gross=_pick(nine, "gross_to_par", "best"),
        worst_9_gross=_pick(nine, "gross_to_par", "worst"),
        best_18_gross=_pick(eighteen, "gross_to_par", "best"),
        worst_18_gross=_pick(eighteen, "gross_to_par", "worst"),
        best_9_net=_pick(nine, "net_to_par", "best"),
        worst_9_net=_pick(nine, "net_to_par", "worst"),
        best_18_net=_pick(eighteen, "net_to_par", "best"),
        worst_18_net=_pick(eighteen, "net_to_par", "worst"),
    )


def find_firsts(rounds: Iterable[RoundAggregate]) -> Firsts:
    ordered = rounds_ascending(rounds)

    def first(predicate) -> RoundAggregate | None:
        return next((r for r in ordered if predicate(r)), None)

    birdie_total = 0
    eagle_total = 0
    birdie_100: RoundAggregate | None = None
    eagle_25: RoundAggregate | None = None
    for round_agg in ordered:
        birdie_total += round_agg.birdies
        eagle_total += round_agg.eagles
        if birdie_100 is None and birdie_total >= 100:
            birdie_100 = round_agg
        if eagle_25 is None and eagle_total >= 25:
            eagle_25 = round_agg

    return Firsts(
        first_round=ordered[0] if ordered else None,
        first_birdie=first(lambda r: r.birdies >= 1),
        first_eagle=first(lambda r: r.eagles >= 1),
        first_albatross=first(lambda r: r.albatrosses >= 1),
        first_hole_in_one=first(lambda r: r.holes_in_one >= 1),
        first_3_birdies=first(lambda r: r.birdies >= 3),
        first_5_birdies=first(lambda r: r.birdies >= 5),
        birdie_100=birdie_100,
        eagle_25=eagle_25,
    )


def _breaks(rounds: List[RoundAggregate], threshold: int) -> int:
    return sum(
        1
        for r in rounds
        if not r.is_9_hole and r.gross_total is not None and r.gross_total < threshold
    )


def count_goals(rounds: Iterable[RoundAggregate]) -> Goals:
    items = list(rounds)
    return Goals(
        rounds=len(items),
        par_or_better_18eq=sum(
            1 for r in items if r.gross_to_par_18eq is not None and r.gross_to_par_18eq <= 0
        ),
        break_100=_breaks(items, 100),
        break_90=_breaks(items, 90),
        break_80=_breaks(items, 80),
        birdie_rounds=sum(1 for r in items if r.birdies >= 1),
        eagle_rounds=sum(1 for r in items if r.eagles >= 1),
        hole_in_one_rounds=sum(1 for r in items if r.holes_in_one >= 1),
    )


__all__ = [
    "BestWorstRounds",
    "Firsts",
    "Goals",
    "ScoringSummary",
    "best_and_worst_rounds",
    "consistency_score",
    "count_goals",
    "find_firsts",
    "summarize_rounds",
]
