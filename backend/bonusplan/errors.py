"""Failure types raised by the planner.

Only input-shape problems and acquisition failures are errors. A day
without a feasible meal is a normal outcome and shows up as ``None`` in
the plan.
"""

from typing import Optional


class PlannerError(Exception):
    """Base class for planner failures."""


class InputShapeError(PlannerError):
    """A meal, product or week row is missing fields or has malformed values."""

    def __init__(self, kind: str, index: Optional[int], detail: str):
        self.kind = kind
        self.index = index
        self.detail = detail
        where = f"{kind}[{index}]" if index is not None else kind
        super().__init__(f"invalid {where}: {detail}")


class AcquisitionFailure(PlannerError):
    """The discount list or the catalog could not be fetched."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"{source} acquisition failed: {detail}")
