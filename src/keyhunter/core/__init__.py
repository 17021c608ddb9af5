"""Core data structures shared by the scanner, CLI and API."""
