"""Error taxonomy for discovery, validation and per-cluster dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from kubectl_multi.shared.report import ClusterResult


class ConfigError(RuntimeError):
    """Raised when a kubeconfig file cannot be read or parsed."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class DiscoveryError(RuntimeError):
    """Raised when clusters cannot be discovered from the configuration."""


class NoClustersError(RuntimeError):
    """Raised when discovery succeeded but found nothing to dispatch to."""

    def __init__(self, message: str = "no clusters discovered") -> None:
        super().__init__(message)


class ConflictingTargetError(ValueError):
    """Raised when both a file source and a type/name target are given."""

    def __init__(
        self, message: str = "provide either filename or resource type at a time"
    ) -> None:
        super().__init__(message)


class MissingTargetError(ValueError):
    """Raised when neither a file source nor a resource target is given."""


class InvocationError(RuntimeError):
    """A single cluster invocation failed. Recorded on that cluster's result."""

    def __init__(
        self, message: str, returncode: Optional[int] = None, stderr: str = ""
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ClusterTimeoutError(InvocationError):
    """A single cluster invocation exceeded the configured timeout."""

    def __init__(self, context: str, timeout: float) -> None:
        super().__init__(f"timed out after {timeout:g}s on cluster {context}")
        self.context = context
        self.timeout = timeout


class DispatchCancelledError(RuntimeError):
    """Dispatch was interrupted; carries the results gathered so far."""

    def __init__(self, results: List["ClusterResult"]) -> None:
        super().__init__(
            f"dispatch cancelled after {len(results)} cluster result(s)"
        )
        self.results = results
