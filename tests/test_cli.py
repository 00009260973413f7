"""Tests for the kubectl-multi CLI."""

import asyncio

import pytest
from click.testing import CliRunner
from rich.console import Console

from conftest import FakeRunner
from kubectl_multi.cli import cli


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def kubectl():
    return FakeRunner(outputs={"wds1": 'deployment.apps "nginx" deleted\n'})


@pytest.fixture
def kubeconfig(kubeconfig_factory):
    return kubeconfig_factory(["cluster1", "its1", "wds1"], current="wds1")


def _obj(kubectl):
    return {"runner": kubectl, "console": Console(force_terminal=False, width=200)}


def test_cli_help(runner):
    """Test CLI help command."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "every cluster managed by KubeStellar" in result.output
    for name in ("delete", "get", "scale", "exec"):
        assert name in result.output


def test_delete_help_shows_examples(runner):
    result = runner.invoke(cli, ["delete", "--help"])
    assert result.exit_code == 0
    assert "kubectl multi delete -f deployment.yaml" in result.output
    assert "--remote-context" in result.output


def test_list_commands(runner):
    result = runner.invoke(cli, ["list-commands"])
    assert result.exit_code == 0
    assert "Available commands:" in result.output
    assert "destructive" in result.output
    assert "read-only" in result.output


def test_delete_confirmed(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli,
        ["delete", "deployment", "nginx", "--kubeconfig", kubeconfig],
        input="yes\n",
        obj=_obj(kubectl),
    )

    assert result.exit_code == 0, result.output
    assert "Type 'yes' to confirm, or anything else to cancel." in result.output
    assert kubectl.contexts == ["wds1", "cluster1"]
    report = result.output[result.output.index("=== Cluster: wds1 ===") :]
    assert report == (
        "=== Cluster: wds1 ===\n"
        'deployment.apps "nginx" deleted\n'
        "\n"
        "=== Cluster: cluster1 ===\n"
        "ok from cluster1\n"
        "\n"
        "=== Cluster: its1 ===\n"
        "Cannot perform this operation on ITS (control) cluster: its1\n"
    )


def test_delete_declined(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli,
        ["delete", "pods", "--all", "--kubeconfig", kubeconfig],
        input="no\n",
        obj=_obj(kubectl),
    )

    assert result.exit_code == 0
    assert "Deletion cancelled..." in result.output
    assert "=== Cluster:" not in result.output
    assert kubectl.calls == []


def test_delete_conflicting_target(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli,
        ["delete", "deployment", "nginx", "-f", "file.yaml", "--kubeconfig", kubeconfig],
        obj=_obj(kubectl),
    )

    assert result.exit_code == 1
    assert "Error: provide either filename or resource type at a time" in result.output
    assert "Are you sure" not in result.output


def test_no_clusters(runner, kubectl, tmp_path):
    empty = tmp_path / "empty"
    empty.write_text("apiVersion: v1\nkind: Config\ncontexts: []\n")

    result = runner.invoke(
        cli, ["delete", "pods", "--kubeconfig", str(empty)], input="yes\n", obj=_obj(kubectl)
    )

    assert result.exit_code == 1
    assert "Error: no clusters discovered" in result.output
    assert "Are you sure" not in result.output


def test_missing_kubeconfig(runner, kubectl, tmp_path):
    result = runner.invoke(
        cli, ["get", "pods", "--kubeconfig", str(tmp_path / "nope")], obj=_obj(kubectl)
    )
    assert result.exit_code == 1
    assert "Error: failed to discover clusters" in result.output


def test_per_cluster_error_exits_zero(runner, kubeconfig):
    kubectl = FakeRunner(failures={"cluster1": "the server has asked for the client to provide credentials"})

    result = runner.invoke(
        cli, ["get", "pods", "--kubeconfig", kubeconfig, "--summary"], obj=_obj(kubectl)
    )

    assert result.exit_code == 0
    assert "=== Cluster: cluster1 ===\nError: the server has asked" in result.output
    assert "3 cluster(s): 2 succeeded, 1 failed, 0 skipped" in result.output
    assert kubectl.contexts[0] == "wds1"


def test_global_flags_after_subcommand(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli,
        [
            "scale",
            "deployment/nginx",
            "--replicas=2",
            "--kubeconfig",
            kubeconfig,
            "-n",
            "shop",
            "--remote-context",
            "cluster1",
            "--max-concurrency",
            "1",
        ],
        obj=_obj(kubectl),
    )

    assert result.exit_code == 0, result.output
    assert kubectl.contexts == ["wds1", "its1"]
    assert kubectl.argv_for("its1") == [
        "scale", "deployment/nginx", "--context", "its1", "--replicas=2", "-n", "shop",
    ]
    assert "Cannot perform this operation on ITS (control) cluster: cluster1" in result.output


def test_scale_without_replicas_is_rejected(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli, ["scale", "deployment/nginx", "--kubeconfig", kubeconfig], obj=_obj(kubectl)
    )
    assert result.exit_code == 1
    assert "--replicas=COUNT is required" in result.output
    assert kubectl.calls == []


def test_invalid_dry_run_choice(runner, kubectl, kubeconfig):
    result = runner.invoke(
        cli, ["delete", "pods", "--dry-run", "maybe", "--kubeconfig", kubeconfig], obj=_obj(kubectl)
    )
    assert result.exit_code == 2


@pytest.mark.parametrize("verb", ["exec", "edit", "port-forward"])
def test_interactive_verbs_are_not_implemented(runner, verb):
    result = runner.invoke(cli, [verb, "nginx", "--", "ls"])
    assert result.exit_code == 1
    assert f"{verb} command not yet implemented" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "kubectl-multi" in result.output


def test_interrupted_dispatch_prints_partial_report(runner, kubeconfig):
    calls = []

    async def interrupted(argv, kubeconfig=""):
        context = argv[argv.index("--context") + 1]
        calls.append(context)
        if context == "cluster1":
            raise asyncio.CancelledError()
        return f"scaled on {context}\n"

    result = runner.invoke(
        cli,
        ["scale", "deployment/nginx", "--replicas=2", "--kubeconfig", kubeconfig, "--max-concurrency", "1"],
        obj=_obj(interrupted),
    )

    assert result.exit_code == 130
    assert calls == ["wds1", "cluster1"]
    assert "=== Cluster: wds1 ===\nscaled on wds1" in result.output
    assert "=== Cluster: cluster1 ===" not in result.output
    assert "Interrupted: remaining clusters were not processed." in result.output


def test_confirmation_is_read_outside_the_event_loop(runner, kubectl, kubeconfig):
    loop_running = []

    def read_line():
        try:
            asyncio.get_running_loop()
            loop_running.append(True)
        except RuntimeError:
            loop_running.append(False)
        return "yes\n"

    obj = _obj(kubectl)
    obj["read_line"] = read_line
    result = runner.invoke(cli, ["delete", "pods", "--all", "--kubeconfig", kubeconfig], obj=obj)

    assert result.exit_code == 0, result.output
    assert loop_running == [False]
    assert kubectl.contexts == ["wds1", "cluster1"]
