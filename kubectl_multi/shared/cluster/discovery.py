"""Cluster discovery from kubeconfig contexts."""

from __future__ import annotations

import logging
from typing import List

from kubectl_multi.shared.cluster.base import ClusterInfo, ClusterInventory
from kubectl_multi.shared.cluster.classifier import classify
from kubectl_multi.shared.errors import ConfigError, DiscoveryError
from kubectl_multi.shared.kubeconfig import load_contexts

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


def discover(
    kubeconfig: str = "",
    control_plane_context: str = "",
    context_override: str = "",
) -> ClusterInventory:
    """Read the kubeconfig once and classify every context it declares.

    Reachability is not probed; an unreachable cluster surfaces as that
    cluster's invocation error at dispatch time.

    Raises:
        DiscoveryError: The kubeconfig could not be loaded.
    """
    try:
        loaded = load_contexts(kubeconfig, context_override)
    except ConfigError as e:
        raise DiscoveryError(f"failed to discover clusters: {e}") from e

    clusters = [
        ClusterInfo(context=name, role=classify(name, control_plane_context))
        for name in loaded.names
    ]
    for cluster in clusters:
        logger.debug("Discovered cluster %s (%s)", cluster.context, cluster.role.value)

    return ClusterInventory(clusters=clusters, current_context=loaded.current_context)


def discover_clusters(
    kubeconfig: str = "", control_plane_context: str = ""
) -> List[ClusterInfo]:
    """Return the classified clusters in configuration order."""
    return discover(kubeconfig, control_plane_context).clusters


def get_target_namespace(namespace: str) -> str:
    """Namespace a command targets when none is given. Not trimmed."""
    return namespace if namespace else DEFAULT_NAMESPACE
