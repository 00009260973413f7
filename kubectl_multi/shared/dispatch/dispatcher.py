"""Execute a dispatch plan with bounded concurrency and ordered results."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from kubectl_multi.shared import debug
from kubectl_multi.shared.dispatch.plan import DispatchPlan, PlannedInvocation
from kubectl_multi.shared.errors import (
    ClusterTimeoutError,
    DispatchCancelledError,
    InvocationError,
)
from kubectl_multi.shared.report import ClusterResult
from kubectl_multi.shared.settings import DEFAULT_MAX_CONCURRENCY

logger = logging.getLogger(__name__)

# (argv, kubeconfig) -> captured stdout; raises InvocationError on failure.
CommandRunner = Callable[[List[str], str], Awaitable[str]]


async def _invoke(
    entry: PlannedInvocation,
    runner: CommandRunner,
    kubeconfig: str,
    timeout: Optional[float],
) -> ClusterResult:
    context = entry.cluster.context
    argv = list(entry.argv or ())
    debug.log_request(context, {"argv": argv, "kubeconfig": kubeconfig})

    async def _call() -> str:
        # A runner's own timeout is an ordinary failure, not an expired --timeout.
        try:
            return await runner(argv, kubeconfig)
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise InvocationError(str(e) or "timeout") from e

    try:
        if timeout is None:
            output = await _call()
        else:
            try:
                output = await asyncio.wait_for(_call(), timeout)
            except asyncio.TimeoutError:
                raise ClusterTimeoutError(context, timeout) from None
    except InvocationError as e:
        result = ClusterResult(context=context, error=e)
    except Exception as e:
        # Failures stay on this cluster's result.
        logger.debug("Invocation on %s raised", context, exc_info=True)
        result = ClusterResult(
            context=context, error=InvocationError(str(e) or e.__class__.__name__)
        )
    else:
        result = ClusterResult(context=context, output=output or "")

    debug.log_response(context, result.as_dict())
    return result


async def dispatch(
    plan: DispatchPlan,
    runner: CommandRunner,
    *,
    kubeconfig: str = "",
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    timeout: Optional[float] = None,
) -> List[ClusterResult]:
    """Run every planned invocation and return results in plan order.

    At most ``max_concurrency`` invocations run at once; ``1`` runs them
    sequentially. Each result lands in the slot of its plan position, so
    completion order never affects report order.

    Raises:
        DispatchCancelledError: The dispatch was cancelled. In-flight
            invocations are cancelled, pending ones never start, and the
            results gathered so far are attached to the error.
    """
    results: List[Optional[ClusterResult]] = [None] * len(plan.entries)
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _run_slot(index: int, entry: PlannedInvocation) -> None:
        if entry.restricted:
            results[index] = ClusterResult.control_plane_notice(entry.cluster.context)
            return
        async with semaphore:
            results[index] = await _invoke(entry, runner, kubeconfig, timeout)

    tasks = [
        asyncio.ensure_future(_run_slot(index, entry))
        for index, entry in enumerate(plan.entries)
    ]

    try:
        await asyncio.gather(*tasks)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        gathered = [result for result in results if result is not None]
        logger.debug(
            "Dispatch of %s cancelled with %d/%d result(s)",
            plan.command,
            len(gathered),
            len(results),
        )
        raise DispatchCancelledError(gathered) from None

    return [result for result in results if result is not None]
