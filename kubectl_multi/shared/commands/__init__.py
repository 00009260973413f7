"""Command family implementations."""

from typing import List, Type

from kubectl_multi.shared.commands.base import (
    BaseCommand,
    VerbClass,
    command_registry,
)
from kubectl_multi.shared.commands.create import CreateCommand
from kubectl_multi.shared.commands.delete import DeleteCommand
from kubectl_multi.shared.commands.describe import DescribeCommand
from kubectl_multi.shared.commands.get import GetCommand
from kubectl_multi.shared.commands.patch import PatchCommand
from kubectl_multi.shared.commands.scale import ScaleCommand
from kubectl_multi.shared.commands.top import TopCommand


def _command_types() -> List[Type[BaseCommand]]:
    return [
        GetCommand,
        DescribeCommand,
        TopCommand,
        CreateCommand,
        PatchCommand,
        ScaleCommand,
        DeleteCommand,
    ]


def initialize_commands() -> None:
    """Register every command family, replacing earlier registrations."""

    command_registry.reset()
    for command_cls in _command_types():
        command_registry.register(command_cls())


__all__ = [
    "BaseCommand",
    "VerbClass",
    "command_registry",
    "initialize_commands",
]
