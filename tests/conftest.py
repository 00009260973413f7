"""Shared fixtures: kubeconfig files on disk and a fake kubectl runner."""

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
import yaml

from kubectl_multi.shared.errors import InvocationError


def write_kubeconfig(
    path: Path, contexts: List[str], current: Optional[str] = None
) -> Path:
    """Write a minimal kubeconfig declaring ``contexts`` in order."""
    data = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [
            {"name": name, "cluster": {"server": f"https://{name}.example:6443"}}
            for name in contexts
        ],
        "contexts": [
            {"name": name, "context": {"cluster": name, "user": "admin"}}
            for name in contexts
        ],
        "users": [{"name": "admin", "user": {"token": "not-a-secret"}}],
    }
    if current is not None:
        data["current-context"] = current
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


class FakeRunner:
    """Stands in for kubectl: records argv, returns canned output or fails."""

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, str]] = None,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: List[Tuple[str, List[str], str]] = []

    @property
    def contexts(self) -> List[str]:
        return [context for context, _, _ in self.calls]

    def argv_for(self, context: str) -> List[str]:
        for called_context, argv, _ in self.calls:
            if called_context == context:
                return argv
        raise KeyError(context)

    async def __call__(self, argv: List[str], kubeconfig: str = "") -> str:
        context = argv[argv.index("--context") + 1]
        self.calls.append((context, list(argv), kubeconfig))
        delay = self.delays.get(context)
        if delay:
            await asyncio.sleep(delay)
        if context in self.failures:
            raise InvocationError(self.failures[context], returncode=1)
        return self.outputs.get(context, f"ok from {context}\n")


@pytest.fixture
def kubeconfig_factory(tmp_path):
    """Return a callable writing a kubeconfig under tmp_path."""

    def _make(contexts: List[str], current: Optional[str] = None, name: str = "config"):
        return str(write_kubeconfig(tmp_path / name, contexts, current))

    return _make


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture(autouse=True)
def isolated_kubeconfig_env(monkeypatch, tmp_path):
    """Keep the developer's own kubeconfig out of every test."""
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
