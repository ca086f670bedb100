"""
Command-line interface for the rwstat package.

This module provides the main CLI entry point for the probe.
"""

from .main import main_cli, run_probe

__all__ = [
    "main_cli",
    "run_probe",
]
