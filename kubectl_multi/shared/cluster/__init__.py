"""Cluster discovery and classification."""

from ..kubeconfig import ClusterContext
from .base import ClusterInfo, ClusterInventory, ClusterRole
from .classifier import classify, is_workload_cluster
from .discovery import discover, discover_clusters, get_target_namespace

__all__ = [
    "ClusterContext",
    "ClusterInfo",
    "ClusterInventory",
    "ClusterRole",
    "classify",
    "is_workload_cluster",
    "discover",
    "discover_clusters",
    "get_target_namespace",
]
