"""Framework-agnostic search domain."""
