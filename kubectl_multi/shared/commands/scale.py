"""Scale deployments, replica sets and stateful sets across managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass, dry_run_args


@dataclass
class ScaleInput:
    """Parameters accepted by the scale command."""

    resources: List[str] = field(default_factory=list)
    filename: str = ""
    replicas: int = -1
    current_replicas: int = -1
    dry_run: str = "none"


class ScaleCommand(BaseCommand):
    input_type = ScaleInput
    verb_class = VerbClass.MUTATING

    def __init__(self) -> None:
        super().__init__(
            name="scale",
            description="Set a new size for a deployment, replica set, or stateful set across managed clusters",
        )

    def validate_inputs(self, params: Any) -> None:
        super().validate_inputs(params)
        if params.replicas < 0:
            raise ValueError("--replicas=COUNT is required, and COUNT must be greater than or equal to 0")

    def flag_args(self, params: Any) -> List[str]:
        args = [f"--replicas={params.replicas}"]
        if params.current_replicas >= 0:
            args.append(f"--current-replicas={params.current_replicas}")
        args += dry_run_args(params.dry_run)
        return args
