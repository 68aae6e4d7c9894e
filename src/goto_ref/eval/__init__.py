"""Evaluator helper modules for the GoTo runtime."""

__all__ = [
    "bind",
    "blocks",
    "expr",
    "fn",
    "helpers",
    "loops",
]
