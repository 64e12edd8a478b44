"""Exceptions raised at the configuration boundary."""


class ConfigurationError(ValueError):
    """Raised when a simulation is configured with unusable parameters.

    Subclasses ValueError so callers validating numeric inputs can keep a
    single except clause.
    """
