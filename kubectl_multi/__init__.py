"""Run kubectl commands across every cluster of a KubeStellar control plane."""

__version__ = "0.1.0"
