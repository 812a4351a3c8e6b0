"""Medical report processing pipeline: extract -> analyze -> illustrate -> persist."""

__version__ = "0.1.0"
