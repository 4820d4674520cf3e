"""File and stream helpers."""
