"""
bayesindex.data
===============

Containers for posterior draws.

Includes:
- draws: DrawTable, Effects, Component, as_sample
"""

from .draws import Component, DrawTable, Effects, as_sample

__all__ = ["DrawTable", "Effects", "Component", "as_sample"]
