"""Search lifecycle and batch execution."""
