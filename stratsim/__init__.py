"""StratSim - strategy simulation and comparison engine."""

__version__ = "0.1.0"
