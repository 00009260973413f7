"""Patch resources across all managed clusters."""

from dataclasses import dataclass, field
from typing import Any, List

from kubectl_multi.shared.commands.base import BaseCommand, VerbClass, dry_run_args

PATCH_TYPES = ("strategic", "merge", "json")


@dataclass
class PatchInput:
    """Parameters accepted by the patch command."""

    resources: List[str] = field(default_factory=list)
    filename: str = ""
    patch: str = ""
    patch_type: str = "strategic"
    dry_run: str = "none"


class PatchCommand(BaseCommand):
    """kubectl patch of one resource (``TYPE NAME`` or ``TYPE/NAME``)."""

    input_type = PatchInput
    verb_class = VerbClass.MUTATING

    def __init__(self) -> None:
        super().__init__(
            name="patch",
            description="Update field(s) of a resource across managed clusters",
        )

    def validate_inputs(self, params: Any) -> None:
        super().validate_inputs(params)
        if len(params.resources) > 2:
            raise ValueError("patch accepts a single resource: TYPE NAME or TYPE/NAME")
        if not params.patch:
            raise ValueError("must specify -p/--patch to patch a resource")
        if params.patch_type not in PATCH_TYPES:
            raise ValueError(f"--type must be one of {', '.join(PATCH_TYPES)}")

    def flag_args(self, params: Any) -> List[str]:
        args = ["-p", params.patch]
        if params.patch_type != "strategic":
            args += ["--type", params.patch_type]
        args += dry_run_args(params.dry_run)
        return args
