"""
Caller-facing service layer.
"""

from .planner import ALL_EVENTS, ActivityPlanner, SubmissionResult, build_planner

__all__ = [
    "ALL_EVENTS",
    "ActivityPlanner",
    "SubmissionResult",
    "build_planner",
]
