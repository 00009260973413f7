#!/usr/bin/env python3
"""PyInstaller entrypoint for the kubectl-multi plugin binary.

This thin wrapper reuses the project CLI so that a frozen, single-file
binary named ``kubectl-multi`` can be dropped on PATH (or shipped in a
Krew-style tarball) and picked up by kubectl as ``kubectl multi``.
"""

from kubectl_multi.cli import main


if __name__ == "__main__":
    main()
