"""Command orchestrator - context analysis and execution of operational test commands."""

__version__ = "0.1.0"
