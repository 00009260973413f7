"""Cluster types shared by discovery, planning and reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class ClusterRole(str, Enum):
    """Role a kubeconfig context plays in the multi-cluster topology."""

    CONTROL_PLANE = "its"
    WORKLOAD = "wds"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ClusterInfo:
    """A discovered, classified dispatch target."""

    context: str
    role: ClusterRole = ClusterRole.UNCLASSIFIED

    @property
    def is_control_plane(self) -> bool:
        return self.role is ClusterRole.CONTROL_PLANE


@dataclass
class ClusterInventory:
    """Discovery output: clusters in configuration order plus the active context."""

    clusters: List[ClusterInfo] = field(default_factory=list)
    current_context: str = ""

    def __post_init__(self) -> None:
        self.by_context: Dict[str, ClusterInfo] = {}
        for cluster in self.clusters:
            if cluster.context in self.by_context:
                raise ValueError(f"duplicate cluster context '{cluster.context}'")
            self.by_context[cluster.context] = cluster

    @property
    def control_plane(self) -> ClusterInfo | None:
        for cluster in self.clusters:
            if cluster.is_control_plane:
                return cluster
        return None

    @property
    def current(self) -> ClusterInfo | None:
        return self.by_context.get(self.current_context)
