"""Dispatch module."""

from .engine import DispatchEngine, IDispatchEngine
from .runner import CycleRunner, SourceFactory

__all__ = ["DispatchEngine", "IDispatchEngine", "CycleRunner", "SourceFactory"]
