"""Explicit configuration threaded through every command entry point."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_REMOTE_CONTEXT = "its1"
DEFAULT_MAX_CONCURRENCY = 5


@dataclass(frozen=True)
class MultiClusterSettings:
    """Options shared by every multi-cluster command."""

    kubeconfig: str = ""
    remote_context: str = DEFAULT_REMOTE_CONTEXT
    context: str = ""
    namespace: str = ""
    all_namespaces: bool = False
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    timeout: Optional[float] = None
    restrict_control_plane_reads: bool = False

    def __post_init__(self) -> None:
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "MultiClusterSettings":
        """Build settings from parsed CLI options, ignoring unrelated keys."""

        known = {
            name: value
            for name, value in options.items()
            if name in cls.__dataclass_fields__ and value is not None
        }
        if "timeout" in options:
            known["timeout"] = options["timeout"]
        return cls(**known)
