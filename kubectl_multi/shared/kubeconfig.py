"""Kubeconfig loading: the ordered list of contexts plus the active one."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from kubectl_multi.shared.errors import ConfigError

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Dataclasses
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ClusterContext:
    """A named kubeconfig context as read from the configuration."""

    name: str
    is_current: bool = False


@dataclass
class KubeconfigContexts:
    """Contexts read from one or more kubeconfig files, in file order."""

    contexts: List[ClusterContext] = field(default_factory=list)
    current_context: str = ""
    sources: List[str] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [ctx.name for ctx in self.contexts]


def default_kubeconfig_path() -> Path:
    return Path.home() / ".kube" / "config"


def resolve_kubeconfig_paths(kubeconfig_path: str = "") -> List[str]:
    """Return the files to read, following kubectl's loading precedence.

    An explicit path wins. Otherwise every entry of ``$KUBECONFIG`` is used,
    and failing that ``~/.kube/config``.
    """

    if kubeconfig_path:
        return [kubeconfig_path]

    env_value = os.environ.get("KUBECONFIG", "")
    env_paths = [p for p in env_value.split(os.pathsep) if p]
    if env_paths:
        # Duplicates are read once, first occurrence keeps its position.
        return list(dict.fromkeys(env_paths))

    return [str(default_kubeconfig_path())]


def _read_kubeconfig(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read kubeconfig {path}: {e}", path=path) from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"kubeconfig {path} is not valid UTF-8: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse kubeconfig {path}: {e}", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"kubeconfig {path} is not a mapping", path=path)

    contexts = data.get("contexts") or []
    if not isinstance(contexts, list):
        raise ConfigError(f"kubeconfig {path}: 'contexts' must be a list", path=path)
    return data


def load_contexts(
    kubeconfig_path: str = "", context_override: Optional[str] = ""
) -> KubeconfigContexts:
    """Load the ordered contexts and the active context.

    Args:
        kubeconfig_path: Explicit kubeconfig file. Empty means loading rules.
        context_override: Context to treat as active instead of the file's
            ``current-context``.

    Raises:
        ConfigError: The explicit file is missing, unreadable or malformed,
            or a file found through the loading rules is malformed.
    """

    paths = resolve_kubeconfig_paths(kubeconfig_path)
    explicit = bool(kubeconfig_path)

    names: List[str] = []
    current = ""
    sources: List[str] = []

    for path in paths:
        if not explicit and not os.path.exists(path):
            logger.debug("Skipping missing kubeconfig %s", path)
            continue

        data = _read_kubeconfig(path)
        sources.append(path)

        for entry in data.get("contexts") or []:
            name = entry.get("name") if isinstance(entry, dict) else None
            if not name or not isinstance(name, str):
                logger.debug("Ignoring unnamed context entry in %s", path)
                continue
            if name not in names:
                names.append(name)

        file_current = data.get("current-context")
        if not current and isinstance(file_current, str):
            current = file_current

    if context_override:
        current = context_override

    contexts = [ClusterContext(name=name, is_current=name == current) for name in names]
    logger.debug(
        "Loaded %d context(s) from %s, current context %r",
        len(contexts),
        sources or "<none>",
        current,
    )
    return KubeconfigContexts(
        contexts=contexts, current_context=current, sources=sources
    )
