"""
Orchestration layer for dxlauncher.

Sits between the CLI (presentation) and the core modules that talk to the
container runtime and the host filesystem.
"""

from .launch_orchestrator import LaunchOrchestrator, LaunchResult, LaunchStatus

__all__ = ["LaunchOrchestrator", "LaunchResult", "LaunchStatus"]
