"""Log Assistant: heuristic normalization and summary of vehicle datalogs."""

__version__ = "1.0.0"
