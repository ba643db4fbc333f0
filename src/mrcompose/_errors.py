"""Error types."""

__all__ = ["ConfigurationError", "OperatorConstructionError", "DimensionTagError"]


class ConfigurationError(ValueError):
    """Inconsistent acquisition descriptor or reconstruction options."""


class OperatorConstructionError(ValueError):
    """Operator cannot be built from the given pattern or data rank."""


class DimensionTagError(ValueError):
    """Axis tags do not line up."""
