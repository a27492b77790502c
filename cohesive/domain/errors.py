"""Exception types raised at the configuration and ingestion boundaries."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """An algorithm parameter or adapter name could not be understood."""


class GraphValidationError(ValueError):
    """An edge list failed validation before a Graph could be built."""


class ClusteringCancelled(RuntimeError):
    """A run was stopped between seeds by its caller."""
