"""
Finance Planner Core - Source Package

The calculation core of a personal finance tracker: recurring income and
subscription schedules, inventory depletion forecasts, and the upcoming-events
timeline that merges them.

DESIGN PRINCIPLES:
1. Pure calculations: no I/O, no caching, no hidden clock
2. Fail early, fail visibly
3. No silent corrections of schedule configs
4. Every derived value is recomputed from current records
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Planner Team"
