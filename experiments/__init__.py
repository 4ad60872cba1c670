"""Command line entry points for comparison runs."""
