"""Exceptions raised by textvertical."""


class TextVerticalError(Exception):
    """Base class for all textvertical errors."""


class ConfigurationError(TextVerticalError, ValueError):
    """Options are missing or invalid. Raised before any drawing happens."""


class LayoutInvariantError(TextVerticalError, ValueError):
    """The layout engine was called with inputs that break its preconditions."""
