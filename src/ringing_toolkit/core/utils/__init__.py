"""
Core Utilities

Small helpers shared by the models and the derivation pipeline.
"""

from .runs import run_len

__all__ = ["run_len"]
