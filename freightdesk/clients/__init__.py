"""HTTP clients for hosted collaborators."""

from .rest_backend import CATEGORY_ALIASES, RestLedgerBackend, normalize_category

__all__ = ["CATEGORY_ALIASES", "RestLedgerBackend", "normalize_category"]
