"""Utility functions for subprocess management and cancellation."""

import asyncio
import shutil
from typing import Any, Dict, List, Optional

from kubectl_multi.shared.errors import InvocationError


async def run_subprocess_with_cancellation(
    cmd: List[str], stdin_data: Optional[bytes] = None
) -> Dict[str, Any]:
    """
    Run a subprocess with proper cancellation support.

    When the task is cancelled (e.g., by Ctrl+C or a per-cluster timeout),
    the subprocess will be terminated.

    Args:
        cmd: Command to execute as a list of strings
        stdin_data: Optional data to send to stdin

    Returns:
        Dictionary with returncode, stdout, and stderr

    Raises:
        asyncio.CancelledError: If the task is cancelled
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.PIPE if stdin_data else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout, stderr = await process.communicate(input=stdin_data)
        return {
            "returncode": process.returncode,
            "stdout": stdout.decode() if stdout else "",
            "stderr": stderr.decode() if stderr else "",
        }
    except asyncio.CancelledError:
        try:
            process.terminate()
            # Give it a moment to terminate gracefully
            try:
                await asyncio.wait_for(process.wait(), timeout=2.0)
            except asyncio.TimeoutError:
                process.kill()
                await process.wait()
        except (ProcessLookupError, OSError):
            # Process might have already finished
            pass
        raise


class KubectlRunner:
    """Run one kubectl invocation against a single cluster.

    Instances are callable as ``await runner(argv, kubeconfig)`` and return
    the captured stdout. A non-zero exit raises :class:`InvocationError`.
    """

    def __init__(self, binary: str = "kubectl") -> None:
        self.binary = binary

    def build_command(self, argv: List[str], kubeconfig: str = "") -> List[str]:
        cmd = [self.binary, *argv]
        if kubeconfig:
            cmd += ["--kubeconfig", kubeconfig]
        return cmd

    async def __call__(self, argv: List[str], kubeconfig: str = "") -> str:
        if not shutil.which(self.binary):
            raise InvocationError(f"{self.binary} not found in PATH")

        result = await run_subprocess_with_cancellation(
            self.build_command(argv, kubeconfig)
        )
        if result["returncode"] != 0:
            message = (result["stderr"] or result["stdout"]).strip()
            raise InvocationError(
                message or f"exit status {result['returncode']}",
                returncode=result["returncode"],
                stderr=result["stderr"],
            )
        return result["stdout"]
