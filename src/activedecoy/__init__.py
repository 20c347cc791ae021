"""Active decoy countermeasure engine for radar-guided missile engagements."""

__version__ = "0.5.0"
