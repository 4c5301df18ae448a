"""
Conformance harness for integration apps.
"""

from .conformance import ConformanceReport, Violation, check_app, check_descriptor, check_metadata, run_conformance
from .loader import LoadedApp, load_app_dir

__all__ = [
    "ConformanceReport",
    "Violation",
    "check_app",
    "check_descriptor",
    "check_metadata",
    "run_conformance",
    "LoadedApp",
    "load_app_dir",
]
