"""Dispatch ordering: which clusters receive an invocation, and in what order.

The active context goes first unless it is the ITS (control) cluster. The
remaining clusters follow in discovery order. The control plane always comes
last: dispatched for read-only verbs, replaced by a notice otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from kubectl_multi.shared.cluster.base import ClusterInfo, ClusterInventory
from kubectl_multi.shared.commands.base import BaseCommand
from kubectl_multi.shared.settings import MultiClusterSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedInvocation:
    """One cluster slot in the plan. ``argv`` is None for a restricted slot."""

    cluster: ClusterInfo
    argv: Optional[Tuple[str, ...]] = None

    @property
    def restricted(self) -> bool:
        return self.argv is None


@dataclass
class DispatchPlan:
    command: str
    entries: List[PlannedInvocation] = field(default_factory=list)

    @property
    def contexts(self) -> List[str]:
        return [entry.cluster.context for entry in self.entries]

    @property
    def dispatched(self) -> List[PlannedInvocation]:
        return [entry for entry in self.entries if not entry.restricted]

    @property
    def restricted(self) -> List[PlannedInvocation]:
        return [entry for entry in self.entries if entry.restricted]


def order_clusters(
    inventory: ClusterInventory,
) -> Tuple[List[ClusterInfo], Optional[ClusterInfo]]:
    """Split the inventory into the ordered workload list and the control plane."""
    ordered: List[ClusterInfo] = []
    current = inventory.current
    if current is not None and not current.is_control_plane:
        ordered.append(current)

    for cluster in inventory.clusters:
        if cluster.is_control_plane:
            continue
        if current is not None and cluster.context == current.context:
            continue
        ordered.append(cluster)

    return ordered, inventory.control_plane


def build_plan(
    command: BaseCommand,
    params: Any,
    inventory: ClusterInventory,
    settings: MultiClusterSettings,
) -> DispatchPlan:
    ordered, control_plane = order_clusters(inventory)

    entries = [
        PlannedInvocation(
            cluster=cluster,
            argv=tuple(command.build_argv(params, cluster.context, settings)),
        )
        for cluster in ordered
    ]

    if control_plane is not None:
        if command.restricts_control_plane(settings):
            entries.append(PlannedInvocation(cluster=control_plane))
        else:
            entries.append(
                PlannedInvocation(
                    cluster=control_plane,
                    argv=tuple(
                        command.build_argv(params, control_plane.context, settings)
                    ),
                )
            )

    plan = DispatchPlan(command=command.name, entries=entries)
    logger.debug("Dispatch plan for %s: %s", command.name, plan.contexts)
    return plan
