"""Delete resources across all managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass, dry_run_args


@dataclass
class DeleteInput:
    """Parameters accepted by the delete command."""

    resources: List[str] = field(default_factory=list)
    filename: str = ""
    recursive: bool = False
    dry_run: str = "none"
    selector: str = ""
    all_resources: bool = False
    force: bool = False
    grace_period: int = -1


class DeleteCommand(BaseCommand):
    """kubectl delete, fanned out to every workload cluster."""

    input_type = DeleteInput
    verb_class = VerbClass.DESTRUCTIVE
    supports_all_namespaces = True
    cancel_message = "Deletion cancelled..."

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete resources across all managed clusters",
        )

    def flag_args(self, params: Any) -> List[str]:
        args: List[str] = []
        if params.recursive:
            args.append("-R")
        args += dry_run_args(params.dry_run)
        if params.selector:
            args += ["-l", params.selector]
        if params.all_resources:
            args.append("--all")
        if params.force:
            args.append("--force")
        if params.grace_period >= 0:
            args.append(f"--grace-period={params.grace_period}")
        return args
