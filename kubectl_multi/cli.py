"""kubectl-multi CLI implementation."""

import asyncio
from typing import Any, Callable, Dict, Tuple

import click
from rich.console import Console

from kubectl_multi import __version__
from kubectl_multi.shared import debug
from kubectl_multi.shared.commands import command_registry, initialize_commands
from kubectl_multi.shared.engine import confirm_command, prepare_command, run_prepared
from kubectl_multi.shared.errors import (
    DiscoveryError,
    DispatchCancelledError,
    NoClustersError,
)
from kubectl_multi.shared.report import print_report
from kubectl_multi.shared.settings import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_REMOTE_CONTEXT,
    MultiClusterSettings,
)
from kubectl_multi.shared.utils import KubectlRunner

DRY_RUN_CHOICE = click.Choice(["none", "server", "client"])


def multicluster_options(func: Callable) -> Callable:
    """Options accepted by every fan-out command, after the subcommand name."""
    options = [
        click.option("--kubeconfig", default="", help="Path to the kubeconfig file to use."),
        click.option(
            "--remote-context",
            default=DEFAULT_REMOTE_CONTEXT,
            show_default=True,
            help="Context of the ITS (control) cluster.",
        ),
        click.option(
            "--context",
            default="",
            help="Treat this context as the active one instead of current-context.",
        ),
        click.option("-n", "--namespace", default="", help="Namespace to target."),
        click.option(
            "-A",
            "--all-namespaces",
            is_flag=True,
            help="Target all namespaces (ignored when --namespace is set).",
        ),
        click.option(
            "--max-concurrency",
            type=click.IntRange(min=1),
            default=DEFAULT_MAX_CONCURRENCY,
            show_default=True,
            envvar="KUBECTL_MULTI_MAX_CONCURRENCY",
            help="Clusters processed at the same time. 1 runs them one by one.",
        ),
        click.option(
            "--timeout",
            type=click.FloatRange(min=0, min_open=True),
            default=None,
            envvar="KUBECTL_MULTI_TIMEOUT",
            help="Per-cluster timeout in seconds. No timeout by default.",
        ),
        click.option(
            "--restrict-control-plane-reads",
            is_flag=True,
            help="Skip the ITS (control) cluster for read-only commands too.",
        ),
        click.option("--summary", is_flag=True, help="Print a summary line after the report."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _run(
    ctx: click.Context, command_name: str, params: Dict[str, Any], options: Dict[str, Any]
) -> None:
    """Run a registered command family and print its report."""
    obj = ctx.ensure_object(dict)
    show_summary = options.pop("summary", False)

    command = command_registry.get(command_name)
    if command is None:
        raise click.ClickException(f"Command '{command_name}' is not registered.")

    try:
        settings = MultiClusterSettings.from_options(options)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    runner = obj.get("runner") or KubectlRunner()
    read_line = obj.get("read_line") or click.get_text_stream("stdin").readline
    console = obj.get("console") or Console()

    try:
        prepared = prepare_command(command, params, settings)
    except (ValueError, DiscoveryError, NoClustersError) as e:
        raise click.ClickException(str(e)) from e

    # The prompt is read before the event loop starts so Ctrl+C aborts it.
    if not confirm_command(prepared, settings, read_line, click.echo):
        click.echo(command.cancel_message)
        return

    try:
        outcome = asyncio.run(run_prepared(prepared, settings, runner=runner))
    except DispatchCancelledError as e:
        print_report(e.results, console, summary=show_summary)
        click.echo("Interrupted: remaining clusters were not processed.", err=True)
        ctx.exit(130)

    print_report(outcome.results, console, summary=show_summary)


@click.group(
    help="Run kubectl commands across every cluster managed by KubeStellar."
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="kubectl-multi")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Root command for the kubectl-multi plugin."""
    initialize_commands()
    ctx.ensure_object(dict)
    if verbose:
        debug.configure_root()
        debug.enable()


@cli.command("list-commands", help="List command families and how they treat clusters.")
def list_commands() -> None:
    """Display the registered command families."""
    commands = command_registry.list_all()
    if not commands:
        click.echo("No commands registered.")
        return

    click.echo("Available commands:")
    for command in commands:
        info = command.describe()
        click.echo(f"  {info['name']:<10} {info['verb_class']:<12} {info['description']}")


@cli.command(
    help="Display one or many resources across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi get pods
  kubectl multi get deployment nginx -o yaml
  kubectl multi get pods -l app=nginx -A""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename, directory, or URL identifying the resources.")
@click.option("-R", "--recursive", is_flag=True, help="Process the directory used in -f recursively.")
@click.option("-l", "--selector", default="", help="Label selector to filter on.")
@click.option("-o", "--output", default="", help="Output format (json, yaml, wide, name, ...).")
@multicluster_options
@click.pass_context
def get(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    recursive: bool,
    selector: str,
    output: str,
    **options: Any,
) -> None:
    _run(
        ctx,
        "get",
        {
            "resources": list(resources),
            "filename": filename,
            "recursive": recursive,
            "selector": selector,
            "output": output,
        },
        options,
    )


@cli.command(
    help="Show details of a resource or group of resources across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi describe deployment nginx
  kubectl multi describe pods -l app=nginx""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename, directory, or URL identifying the resources.")
@click.option("-R", "--recursive", is_flag=True, help="Process the directory used in -f recursively.")
@click.option("-l", "--selector", default="", help="Label selector to filter on.")
@multicluster_options
@click.pass_context
def describe(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    recursive: bool,
    selector: str,
    **options: Any,
) -> None:
    _run(
        ctx,
        "describe",
        {
            "resources": list(resources),
            "filename": filename,
            "recursive": recursive,
            "selector": selector,
        },
        options,
    )


@cli.command(
    help="Display resource (CPU/memory) usage across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi top nodes
  kubectl multi top pods -n kube-system""",
)
@click.argument("resources", nargs=-1)
@click.option("-l", "--selector", default="", help="Label selector to filter on.")
@multicluster_options
@click.pass_context
def top(
    ctx: click.Context, resources: Tuple[str, ...], selector: str, **options: Any
) -> None:
    _run(ctx, "top", {"resources": list(resources), "selector": selector}, options)


@cli.command(
    help="Create a resource from a file across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi create -f deployment.yaml
  kubectl multi create -f ./manifests -R --dry-run=server""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename, directory, or URL to files to create the resource from.")
@click.option("-R", "--recursive", is_flag=True, help="Process the directory used in -f recursively.")
@click.option("--dry-run", type=DRY_RUN_CHOICE, default="none", show_default=True)
@multicluster_options
@click.pass_context
def create(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    recursive: bool,
    dry_run: str,
    **options: Any,
) -> None:
    _run(
        ctx,
        "create",
        {
            "resources": list(resources),
            "filename": filename,
            "recursive": recursive,
            "dry_run": dry_run,
        },
        options,
    )


@cli.command(
    help="Update field(s) of a resource across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi patch deployment nginx -p '{"spec":{"replicas":2}}'
  kubectl multi patch deployment/nginx --type merge -p '{"metadata":{"labels":{"tier":"web"}}}'""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename identifying the resource to patch.")
@click.option("-p", "--patch", "patch_body", default="", help="The patch to apply to the resource.")
@click.option(
    "--type",
    "patch_type",
    type=click.Choice(["strategic", "merge", "json"]),
    default="strategic",
    show_default=True,
)
@click.option("--dry-run", type=DRY_RUN_CHOICE, default="none", show_default=True)
@multicluster_options
@click.pass_context
def patch(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    patch_body: str,
    patch_type: str,
    dry_run: str,
    **options: Any,
) -> None:
    _run(
        ctx,
        "patch",
        {
            "resources": list(resources),
            "filename": filename,
            "patch": patch_body,
            "patch_type": patch_type,
            "dry_run": dry_run,
        },
        options,
    )


@cli.command(
    help="Set a new size for a deployment, replica set, or stateful set across all managed clusters.",
    epilog="""\b
Examples:
  kubectl multi scale deployment nginx --replicas=3
  kubectl multi scale deployment/nginx --replicas=0 --current-replicas=3""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename identifying the resource to scale.")
@click.option("--replicas", type=int, default=-1, help="The new desired number of replicas.")
@click.option("--current-replicas", type=int, default=-1, help="Precondition for the current size.")
@click.option("--dry-run", type=DRY_RUN_CHOICE, default="none", show_default=True)
@multicluster_options
@click.pass_context
def scale(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    replicas: int,
    current_replicas: int,
    dry_run: str,
    **options: Any,
) -> None:
    _run(
        ctx,
        "scale",
        {
            "resources": list(resources),
            "filename": filename,
            "replicas": replicas,
            "current_replicas": current_replicas,
            "dry_run": dry_run,
        },
        options,
    )


@cli.command(
    help="Delete resources across all managed clusters. Asks for confirmation first.",
    epilog="""\b
Examples:
  # Delete a deployment from all managed clusters
  kubectl multi delete deployment nginx
  # Delete pods with a specific label from all clusters
  kubectl multi delete pods -l app=nginx
  # Delete resources from a file across all clusters
  kubectl multi delete -f deployment.yaml
  # Delete all pods in all clusters
  kubectl multi delete pods --all
  # Delete with force flag across all clusters
  kubectl multi delete pod nginx --force""",
)
@click.argument("resources", nargs=-1)
@click.option("-f", "--filename", default="", help="Filename, directory, or URL to files to use to delete the resource.")
@click.option("-R", "--recursive", is_flag=True, help="Process the directory used in -f, --filename recursively.")
@click.option("--dry-run", type=DRY_RUN_CHOICE, default="none", show_default=True)
@click.option("-l", "--selector", default="", help="Label selector to filter on.")
@click.option("--all", "all_resources", is_flag=True, help="Delete all resources of the given type.")
@click.option("--force", is_flag=True, help="Immediately remove resources from the API.")
@click.option("--grace-period", type=int, default=-1, help="Seconds given to the resource to terminate gracefully.")
@multicluster_options
@click.pass_context
def delete(
    ctx: click.Context,
    resources: Tuple[str, ...],
    filename: str,
    recursive: bool,
    dry_run: str,
    selector: str,
    all_resources: bool,
    force: bool,
    grace_period: int,
    **options: Any,
) -> None:
    _run(
        ctx,
        "delete",
        {
            "resources": list(resources),
            "filename": filename,
            "recursive": recursive,
            "dry_run": dry_run,
            "selector": selector,
            "all_resources": all_resources,
            "force": force,
            "grace_period": grace_period,
        },
        options,
    )


@cli.command(
    "exec",
    help="Execute a command in a container across managed clusters.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def exec_command(args: Tuple[str, ...]) -> None:
    raise click.ClickException("exec command not yet implemented")


@cli.command(
    help="Edit a resource on the server across managed clusters.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def edit(args: Tuple[str, ...]) -> None:
    raise click.ClickException("edit command not yet implemented")


@cli.command(
    "port-forward",
    help="Forward one or more local ports to a pod across managed clusters.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def port_forward(args: Tuple[str, ...]) -> None:
    raise click.ClickException("port-forward command not yet implemented")


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
