"""Handicap-index trajectory fitting and projection."""

from .curves import fit_exp_best_floor, fit_or_none, fit_series  # noqa: F401
from .schemas import (  # noqa: F401
    EntityHistory,
    EtaResult,
    Fit,
    FitResult,
    GoalRow,
    HiPoint,
    InterceptResult,
    PotentialFloor,
    ProjectionRow,
    TrendPoint,
)
from .service import (  # noqa: F401
    compare_goal_eta,
    compare_projection,
    eta_for_target,
    next_intercept,
    potential_floor,
    projected_on_date,
    sample_trend,
)
from .solver import (  # noqa: F401
    find_next_crossing,
    find_next_intercept,
    solve_time_to_target,
)
