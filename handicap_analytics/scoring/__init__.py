"""Round, hole and course scoring analytics over hole records."""

from .allocation import (  # noqa: F401
    allocate_strokes,
    net_from_gross,
    playing_handicap,
    stableford_points,
    strokes_received_on_hole,
)
from .eclectic import (  # noqa: F401
    CourseRecord,
    EclecticCard,
    course_records,
    eclectic_scorecard,
    sort_course_records,
)
from .filters import RecordFilter, TimePreset  # noqa: F401
from .holes import (  # noqa: F401
    WorstHole,
    blowup_after_previous,
    by_length,
    by_par,
    by_stroke_index,
    hole_scoring_summary,
    rank_worst_holes,
    scoring_distribution,
)
from .milestones import (  # noqa: F401
    best_and_worst_rounds,
    count_goals,
    find_firsts,
    summarize_rounds,
)
from .models import HoleRecord, RoundAggregate  # noqa: F401
from .rounds import aggregate_rounds, hole_net_strokes  # noqa: F401
from .streaks import best_stretch, compute_streaks  # noqa: F401
from .tees import (  # noqa: F401
    NineTag,
    TeeIdentity,
    canonical_hole_number,
    normalize_tee_name,
)
