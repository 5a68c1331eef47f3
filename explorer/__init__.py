"""
Explorer — runs the web API exploration pipeline.
"""

from .orchestrator import Explorer, perform_exploration, CANCELLED_MESSAGE
from .report import build_api_info

__all__ = [
    "Explorer",
    "perform_exploration",
    "build_api_info",
    "CANCELLED_MESSAGE",
]
