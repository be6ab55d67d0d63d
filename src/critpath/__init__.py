"""critpath - critical-path scheduling for Gantt-style project plans."""

__version__ = "0.1.0"
