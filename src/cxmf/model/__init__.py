"""In-memory model types and structural helpers."""
