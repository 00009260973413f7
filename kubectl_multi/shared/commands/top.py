"""Resource (CPU/memory) usage across all managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass

TOP_RESOURCES = ("node", "nodes", "no", "pod", "pods", "po")


@dataclass
class TopInput:
    resources: List[str] = field(default_factory=list)
    selector: str = ""


class TopCommand(BaseCommand):
    input_type = TopInput
    verb_class = VerbClass.READ_ONLY
    accepts_filename = False
    supports_all_namespaces = True

    def __init__(self) -> None:
        super().__init__(
            name="top",
            description="Display resource (CPU/memory) usage across managed clusters",
        )

    def validate_inputs(self, params: Any) -> None:
        super().validate_inputs(params)
        kind = params.resources[0]
        if kind not in TOP_RESOURCES:
            raise ValueError(f"top supports node or pod resources, got '{kind}'")
        if len(params.resources) > 2:
            raise ValueError("top accepts at most one resource name")

    def flag_args(self, params: Any) -> List[str]:
        if params.selector:
            return ["-l", params.selector]
        return []
