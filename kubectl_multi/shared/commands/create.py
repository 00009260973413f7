"""Create resources from a file across all managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass, dry_run_args


@dataclass
class CreateInput:
    resources: List[str] = field(default_factory=list)
    filename: str = ""
    recursive: bool = False
    dry_run: str = "none"


class CreateCommand(BaseCommand):
    input_type = CreateInput
    verb_class = VerbClass.MUTATING
    accepts_resources = False

    def __init__(self) -> None:
        super().__init__(
            name="create",
            description="Create a resource from a file across managed clusters",
        )

    def flag_args(self, params: Any) -> List[str]:
        args: List[str] = []
        if params.recursive:
            args.append("-R")
        args += dry_run_args(params.dry_run)
        return args
