"""
promprobe - Prometheus discovery probe.

Queries a Prometheus-compatible backend and reports the results as
topology entities to an orchestration server.
"""

__version__ = "0.1.0"
