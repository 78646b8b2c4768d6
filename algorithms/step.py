"""
step.py — Algorithm Step Snapshot
==================================
Every runner is a generator that yields Step objects.
A Step is a frozen-in-time record of one decision point in the
algorithm, carrying everything a renderer needs to draw that frame:

    • `kind`        – semantic tag ("compare", "swap", "visit", …)
    • `payload`     – FULL snapshot of the working data (never a diff)
    • `code_line`   – which pseudocode line is executing
    • `description` – plain-English narration (the playback log reads this)
    • `delay_ms`    – optional per-step override of the playback delay

Design decisions:
  - Step is a frozen dataclass.  The runner generator is the only
    writer; engines and renderers are pure readers.
  - Every payload value is deep-copied by StepBuilder.snapshot() so a
    later mutation of the algorithm's working arrays can never leak
    into an already-recorded step.
  - `kind` is not a global enum.  Each runner module documents its own
    vocabulary in its docstring.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind        : Discriminator tag selecting meaning and payload shape.
        payload     : {name: value} snapshot of every structure a renderer needs.
        code_line   : 0-based index into the runner's PSEUDOCODE (cosmetic).
        description : Human-readable narration of the event.
        delay_ms    : Overrides the engine's speed delay for the NEXT reveal.
    """

    kind:        str
    payload:     Dict[str, Any]  = field(default_factory=dict)
    code_line:   Optional[int]   = None
    description: Optional[str]   = None
    delay_ms:    Optional[int]   = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly copy (used by the recorder export and the API)."""
        return {
            "kind":        self.kind,
            "payload":     copy.deepcopy(self.payload),
            "code_line":   self.code_line,
            "description": self.description,
            "delay_ms":    self.delay_ms,
        }


# ---------------------------------------------------------------------------
# Convenience builder so runners don't have to deep-copy by hand
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Records Steps for one run.

    Usage inside a runner generator:
        sb = StepBuilder()
        yield sb.snapshot("compare", code_line=6,
                          description=f"Compare arr[{j}] with arr[{j+1}]",
                          indices=[j, j + 1], array=arr)

    Every keyword becomes a payload entry and is deep-copied, so passing
    the live working list is safe.
    """

    def __init__(self):
        self.steps_recorded: int = 0

    def snapshot(
        self,
        kind: str,
        code_line: Optional[int] = None,
        description: Optional[str] = None,
        delay_ms: Optional[int] = None,
        **payload: Any,
    ) -> Step:
        self.steps_recorded += 1
        return Step(
            kind=kind,
            payload=copy.deepcopy(payload),
            code_line=code_line,
            description=description,
            delay_ms=delay_ms,
        )


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Validation:
    """Outcome of a runner's validate_input().  Invalid input is a value, not an exception."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "Validation":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "Validation":
        return cls(valid=False, error=error)

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}


def kinds(steps: List[Step]) -> List[str]:
    """The kind sequence of a trace."""
    return [s.kind for s in steps]
