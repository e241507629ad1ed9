"""Sync orchestration."""

from .orchestrator import TableSync

__all__ = ["TableSync"]
