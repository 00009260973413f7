"""Base command shared by every multi-cluster command family."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

from kubectl_multi.shared.cluster.discovery import get_target_namespace
from kubectl_multi.shared.errors import ConflictingTargetError, MissingTargetError
from kubectl_multi.shared.settings import MultiClusterSettings

if TYPE_CHECKING:
    from kubectl_multi.shared.dispatch.plan import DispatchPlan

DRY_RUN_MODES = ("none", "server", "client")


class VerbClass(str, Enum):
    """How a verb affects the clusters it runs against."""

    READ_ONLY = "read-only"
    MUTATING = "mutating"
    DESTRUCTIVE = "destructive"


def dry_run_args(mode: str) -> List[str]:
    if mode and mode != "none":
        return [f"--dry-run={mode}"]
    return []


class BaseCommand(ABC):
    """Base class for all command families.

    A command family turns validated inputs into the argv of one
    single-cluster kubectl invocation. Ordering, confirmation and execution
    are handled by the engine.
    """

    input_type: Type[Any]
    verb_class: VerbClass = VerbClass.READ_ONLY
    accepts_filename: bool = True
    accepts_resources: bool = True
    supports_all_namespaces: bool = False
    cancel_message: str = "Operation cancelled..."

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    @property
    def requires_confirmation(self) -> bool:
        return self.verb_class is VerbClass.DESTRUCTIVE

    def restricts_control_plane(self, settings: MultiClusterSettings) -> bool:
        """Whether the ITS cluster gets a notice instead of an invocation."""
        if self.verb_class is VerbClass.READ_ONLY:
            return settings.restrict_control_plane_reads
        return True

    def parse_inputs(self, **kwargs: Any) -> Any:
        return self.input_type(**kwargs)

    def validate_inputs(self, params: Any) -> None:
        """Validate the requested target before any discovery happens.

        Raises:
            ConflictingTargetError: Both a file source and resources were given.
            MissingTargetError: Neither was given.
            ValueError: A verb-specific option is invalid.
        """
        filename = getattr(params, "filename", "")
        resources = getattr(params, "resources", None) or []

        if filename and resources:
            raise ConflictingTargetError()
        if not self.accepts_resources and resources:
            raise MissingTargetError(
                f"{self.name} only accepts resources from -f/--filename"
            )
        if not filename and not resources:
            raise MissingTargetError(self.missing_target_message())

        dry_run = getattr(params, "dry_run", "none")
        if dry_run and dry_run not in DRY_RUN_MODES:
            raise ValueError('--dry-run must be "none", "server", or "client"')

    def missing_target_message(self) -> str:
        if self.accepts_filename and self.accepts_resources:
            return "you must provide one or more resources by argument or filename"
        if self.accepts_filename:
            return "you must provide resources with -f/--filename"
        return "you must specify the type of resource"

    def target_args(self, params: Any) -> List[str]:
        filename = getattr(params, "filename", "")
        if filename:
            return ["-f", filename]
        return list(params.resources)

    @abstractmethod
    def flag_args(self, params: Any) -> List[str]:
        """Verb-specific flags, each only present when set."""

    def namespace_args(self, settings: MultiClusterSettings) -> List[str]:
        if settings.namespace:
            return ["-n", settings.namespace]
        if settings.all_namespaces and self.supports_all_namespaces:
            return ["--all-namespaces"]
        return []

    def build_argv(
        self, params: Any, context: str, settings: MultiClusterSettings
    ) -> List[str]:
        """Build the argv for one cluster, without the kubectl binary."""
        return [
            self.name,
            *self.target_args(params),
            "--context",
            context,
            *self.flag_args(params),
            *self.namespace_args(settings),
        ]

    def confirmation_prompt(
        self, params: Any, plan: "DispatchPlan", settings: MultiClusterSettings
    ) -> str:
        """Text shown by the confirmation gate for destructive verbs."""
        lines = ["The following clusters will be affected:"]
        lines += [f"  - {entry.cluster.context}" for entry in plan.dispatched]
        for entry in plan.restricted:
            lines.append(f"Skipping ITS (control) cluster: {entry.cluster.context}")
        if settings.all_namespaces and not settings.namespace:
            lines.append("Namespace: all namespaces")
        else:
            lines.append(f"Namespace: {get_target_namespace(settings.namespace)}")
        lines.append(f"Are you sure you want to {self.name} these resources ?")
        lines.append("Type 'yes' to confirm, or anything else to cancel.")
        return "\n".join(lines)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "verb_class": self.verb_class.value,
        }


class CommandRegistry:
    """Registry to manage all available command families."""

    def __init__(self):
        self._commands: Dict[str, BaseCommand] = {}

    def register(self, command: BaseCommand) -> None:
        """Register a new command family."""
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[BaseCommand]:
        """Get a command family by verb."""
        return self._commands.get(name)

    def list_all(self) -> List[BaseCommand]:
        """List all registered command families."""
        return list(self._commands.values())

    def reset(self) -> None:
        self._commands.clear()


command_registry = CommandRegistry()
