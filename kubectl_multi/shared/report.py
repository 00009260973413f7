"""Per-cluster results and the combined report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.text import Text

RESTRICTED_NOTICE = "Cannot perform this operation on ITS (control) cluster: {context}"


@dataclass
class ClusterResult:
    """Outcome of one planned entry, in dispatch order."""

    context: str
    output: str = ""
    error: Optional[BaseException] = None
    restricted: bool = False

    @classmethod
    def control_plane_notice(cls, context: str) -> "ClusterResult":
        return cls(
            context=context,
            output=RESTRICTED_NOTICE.format(context=context) + "\n",
            restricted=True,
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "error"
        if self.restricted:
            return "restricted"
        return "success"

    def body(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}\n"
        if self.output and not self.output.endswith("\n"):
            return self.output + "\n"
        return self.output

    def as_dict(self) -> Dict[str, Any]:
        return {
            "context": self.context,
            "status": self.status,
            "output": self.output,
            "error": str(self.error) if self.error is not None else None,
        }


def block_header(context: str) -> str:
    return f"=== Cluster: {context} ==="


def render(results: Iterable[ClusterResult]) -> str:
    """Render one labeled block per result, separated by a blank line."""
    return "\n".join(f"{block_header(r.context)}\n{r.body()}" for r in results)


def summarize(results: List[ClusterResult]) -> str:
    succeeded = sum(1 for r in results if r.status == "success")
    failed = sum(1 for r in results if not r.ok)
    skipped = sum(1 for r in results if r.status == "restricted")
    return (
        f"{len(results)} cluster(s): {succeeded} succeeded, {failed} failed, "
        f"{skipped} skipped"
    )


def print_report(
    results: List[ClusterResult],
    console: Optional[Console] = None,
    summary: bool = False,
) -> None:
    """Print the report with rich styling. Text content matches :func:`render`."""
    console = console or Console()

    for index, result in enumerate(results):
        if index:
            console.print()
        console.print(Text(block_header(result.context), style="bold cyan"), soft_wrap=True)
        body = result.body().rstrip("\n")
        if not body:
            continue
        if result.error is not None:
            style = "red"
        elif result.restricted:
            style = "yellow"
        else:
            style = ""
        console.print(Text(body, style=style), soft_wrap=True)

    if summary:
        console.print()
        console.print(Text(summarize(results), style="bold"), soft_wrap=True)
