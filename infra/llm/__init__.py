"""External chat completion helpers."""
