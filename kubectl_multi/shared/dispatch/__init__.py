"""Dispatch planning and execution."""

from .dispatcher import CommandRunner, dispatch
from .plan import DispatchPlan, PlannedInvocation, build_plan, order_clusters

__all__ = [
    "CommandRunner",
    "dispatch",
    "DispatchPlan",
    "PlannedInvocation",
    "build_plan",
    "order_clusters",
]
