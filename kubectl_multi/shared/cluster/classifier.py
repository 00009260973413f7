"""Context name classification into control-plane, workload or neither."""

from __future__ import annotations

from kubectl_multi.shared.cluster.base import ClusterRole

WORKLOAD_MARKER = "wds"
_SEGMENT_DELIMITERS = ("-", "_")


def is_workload_cluster(name: str) -> bool:
    """Check if a context names a WDS (Workload Description Space) cluster.

    The marker must be the name's prefix or a whole ``-``/``_`` delimited
    segment. Matching is case-sensitive: ``WdsCluster`` is not a workload
    cluster.
    """
    if name.startswith(WORKLOAD_MARKER):
        return True

    segment_start = 0
    for index, char in enumerate(name):
        if char in _SEGMENT_DELIMITERS:
            if name[segment_start:index] == WORKLOAD_MARKER:
                return True
            segment_start = index + 1
    return name[segment_start:] == WORKLOAD_MARKER


def classify(context_name: str, control_plane_context: str = "") -> ClusterRole:
    """Assign a role to a context.

    The control plane is identified by identity with ``control_plane_context``,
    never by name pattern.
    """
    if not context_name:
        return ClusterRole.UNCLASSIFIED
    if control_plane_context and context_name == control_plane_context:
        return ClusterRole.CONTROL_PLANE
    if is_workload_cluster(context_name):
        return ClusterRole.WORKLOAD
    return ClusterRole.UNCLASSIFIED
