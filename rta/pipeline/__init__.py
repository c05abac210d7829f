"""Job pipeline orchestration."""

from rta.pipeline.orchestrator import JobOrchestrator

__all__ = ["JobOrchestrator"]
