"""ReactGraph CLI: static analysis of React component state, props and data flows."""

__version__ = "0.3.0"

from .analyzer import ComponentAnalyzer, analyze_project
from .models import AnalysisResult, Component, ComponentItem, Conflict, DataFlow

__all__ = [
    "AnalysisResult",
    "Component",
    "ComponentAnalyzer",
    "ComponentItem",
    "Conflict",
    "DataFlow",
    "analyze_project",
]
