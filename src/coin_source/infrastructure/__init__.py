"""Cross-cutting infrastructure: logging."""
