"""
recorder.py — Run Recorder & Analytics
========================================
Validates an input, runs the algorithm to completion, times it, and
computes the numbers the analytics panel and battle summary show.

Usage:
    rec = Recorder()
    recording = rec.record("bubble_sort", {"array": [3, 1, 2]})
    if recording.ok:
        recording.metrics.total_steps
        recording.export()             # JSON-safe snapshot for save/replay

Comparison Mode:
    Record two algorithms on the SAME input, then
    compare(left, right) → ComparisonResult.
"""

import logging
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Step, Validation

logger = logging.getLogger(__name__)

# Final-payload keys that describe how a run ended.
OUTCOME_KEYS = (
    "found", "index", "solved", "solution_found", "budget_exhausted",
    "has_negative_cycle", "result", "max_value", "length", "lcs",
    "total_value", "total_cost", "distance", "moves",
)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    total_steps:  int   = 0            # number of Steps yielded
    comparisons:  int   = 0            # "compare" steps
    swaps:        int   = 0            # "swap" steps
    wall_time_ms: float = 0.0          # wall-clock time to run to completion
    kind_counts:  Dict[str, int] = field(default_factory=dict)
    outcome:      Dict[str, Any] = field(default_factory=dict)   # flags from the final payload


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: "A" (left), "B" (right) or "tie"; lower is better
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_swaps:       str = ""


@dataclass
class Recording:
    algo_key:   str
    input:      Dict[str, Any]
    validation: Validation
    steps:      List[Step]           = field(default_factory=list)
    metrics:    Optional[RunMetrics] = None

    @property
    def ok(self) -> bool:
        return self.validation.valid

    def export(self) -> Dict[str, Any]:
        return {
            "algo_key":   self.algo_key,
            "input":      self.input,
            "validation": self.validation.to_dict(),
            "metrics":    asdict(self.metrics) if self.metrics else {},
            "steps":      export_steps(self.steps),
        }


def export_steps(steps: Sequence[Step]) -> List[Dict[str, Any]]:
    """JSON-safe list of step dicts."""
    return [s.to_dict() for s in steps]


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        last : The most recent Recording, or None.
    """

    def __init__(self):
        self.last: Optional[Recording] = None

    def record(self, algo_key: str, data: Any) -> Recording:
        """
        Validate + generate.  Unknown keys raise ValueError; invalid input
        returns a Recording with validation.valid False and no steps.
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        validation = info.validate_input(data)
        if not validation:
            logger.info("rejected input for %s: %s", algo_key, validation.error)
            self.last = Recording(algo_key=algo_key, input=data, validation=validation)
            return self.last

        start = time.perf_counter()
        steps = info.generate_steps(data)
        wall_ms = (time.perf_counter() - start) * 1000

        metrics = compute_metrics(info, steps, wall_ms)
        logger.debug("%s produced %d steps in %.2f ms", algo_key, len(steps), wall_ms)
        self.last = Recording(
            algo_key=algo_key, input=data, validation=validation,
            steps=steps, metrics=metrics,
        )
        return self.last


def compute_metrics(info: AlgoInfo, steps: Sequence[Step], wall_ms: float = 0.0) -> RunMetrics:
    counts = Counter(s.kind for s in steps)
    last = steps[-1] if steps else None
    outcome = {k: last.payload[k] for k in OUTCOME_KEYS if last and k in last.payload}
    return RunMetrics(
        algo_key=info.key,
        algo_label=info.label,
        total_steps=len(steps),
        comparisons=counts.get("compare", 0),
        swaps=counts.get("swap", 0),
        wall_time_ms=round(wall_ms, 2),
        kind_counts=dict(counts),
        outcome=outcome,
    )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recording, right: Recording) -> ComparisonResult:
    """Given two completed Recordings, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val: float, r_val: float) -> str:
        if l_val == r_val:
            return "tie"
        return "A" if l_val < r_val else "B"

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps),
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
    )
