"""Single entry point that runs one logical command against every cluster."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

import click

from kubectl_multi.shared.cluster.discovery import discover
from kubectl_multi.shared.commands.base import BaseCommand
from kubectl_multi.shared.confirmation import ReadLine, confirm_destructive
from kubectl_multi.shared.dispatch.dispatcher import CommandRunner, dispatch
from kubectl_multi.shared.dispatch.plan import DispatchPlan, build_plan
from kubectl_multi.shared.errors import NoClustersError
from kubectl_multi.shared.report import ClusterResult
from kubectl_multi.shared.settings import MultiClusterSettings
from kubectl_multi.shared.utils import KubectlRunner

logger = logging.getLogger(__name__)


class CommandStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class CommandOutcome:
    """What a command run produced. Per-cluster errors live in ``results``."""

    status: CommandStatus
    results: List[ClusterResult] = field(default_factory=list)
    plan: Optional[DispatchPlan] = None

    @property
    def cancelled(self) -> bool:
        return self.status is CommandStatus.CANCELLED


@dataclass
class PreparedCommand:
    """A validated command with its dispatch plan, ready to confirm and run."""

    command: BaseCommand
    params: Any
    plan: DispatchPlan


def prepare_command(
    command: BaseCommand,
    params: Union[Dict[str, Any], Any],
    settings: MultiClusterSettings,
) -> PreparedCommand:
    """Validate the target, discover clusters and build the plan.

    Raises:
        ValueError: The target is invalid. Raised before any discovery.
        DiscoveryError: The kubeconfig could not be loaded.
        NoClustersError: Discovery found no clusters.
    """
    if isinstance(params, dict):
        params = command.parse_inputs(**params)
    command.validate_inputs(params)

    inventory = discover(
        settings.kubeconfig, settings.remote_context, settings.context
    )
    if not inventory.clusters:
        raise NoClustersError()

    plan = build_plan(command, params, inventory, settings)
    return PreparedCommand(command=command, params=params, plan=plan)


def confirm_command(
    prepared: PreparedCommand,
    settings: MultiClusterSettings,
    read_line: Optional[ReadLine] = None,
    echo: Callable[[str], None] = click.echo,
) -> bool:
    """Run the confirmation gate when the verb needs one.

    Reading blocks, so callers run this outside the event loop.
    """
    command = prepared.command
    if not command.requires_confirmation:
        return True

    prompt = command.confirmation_prompt(prepared.params, prepared.plan, settings)
    reader = read_line or click.get_text_stream("stdin").readline
    if confirm_destructive(prompt, reader, echo):
        return True
    logger.debug("%s declined at confirmation", command.name)
    return False


async def run_prepared(
    prepared: PreparedCommand,
    settings: MultiClusterSettings,
    *,
    runner: Optional[CommandRunner] = None,
) -> CommandOutcome:
    results = await dispatch(
        prepared.plan,
        runner or KubectlRunner(),
        kubeconfig=settings.kubeconfig,
        max_concurrency=settings.max_concurrency,
        timeout=settings.timeout,
    )
    return CommandOutcome(
        status=CommandStatus.COMPLETED, results=results, plan=prepared.plan
    )


async def execute_command(
    command: BaseCommand,
    params: Union[Dict[str, Any], Any],
    settings: MultiClusterSettings,
    *,
    runner: Optional[CommandRunner] = None,
    read_line: Optional[ReadLine] = None,
    echo: Callable[[str], None] = click.echo,
) -> CommandOutcome:
    """Validate, discover, confirm, dispatch.

    Only pre-dispatch failures raise: invalid targets (``ValueError``
    subclasses, before any discovery), ``DiscoveryError`` and
    ``NoClustersError``. A declined confirmation returns a cancelled outcome.
    """
    prepared = prepare_command(command, params, settings)
    if not confirm_command(prepared, settings, read_line, echo):
        return CommandOutcome(status=CommandStatus.CANCELLED, plan=prepared.plan)
    return await run_prepared(prepared, settings, runner=runner)
