"""Configuration for the Log Assistant."""
