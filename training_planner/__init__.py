"""Training load calculator and workout planner."""

__version__ = "0.1.0"
