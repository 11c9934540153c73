"""
Error types.

Responsibility: the single domain error raised on contract violations.
"""


class InvalidArgument(ValueError):
    """An argument violates the mathematical contract of the operation."""
