"""Grid loading, generation and random number helpers."""
