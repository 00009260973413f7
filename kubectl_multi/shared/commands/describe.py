"""Show details of resources across all managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass


@dataclass
class DescribeInput:
    resources: List[str] = field(default_factory=list)
    filename: str = ""
    recursive: bool = False
    selector: str = ""


class DescribeCommand(BaseCommand):
    input_type = DescribeInput
    verb_class = VerbClass.READ_ONLY
    supports_all_namespaces = True

    def __init__(self) -> None:
        super().__init__(
            name="describe",
            description="Show details of a specific resource or group of resources across managed clusters",
        )

    def flag_args(self, params: Any) -> List[str]:
        args: List[str] = []
        if params.recursive:
            args.append("-R")
        if params.selector:
            args += ["-l", params.selector]
        return args
