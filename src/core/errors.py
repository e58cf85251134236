# src/core/errors.py
"""Exception hierarchy shared by all modules.

Fetch failures and missing districts are *values*, not exceptions; see
``fetching.models.FetchFailure`` and the ``None`` returns of the query API.
"""

from __future__ import annotations


class WaldbrandIndexError(Exception):
    """Base class for all package errors."""


class ConfigurationError(WaldbrandIndexError):
    """Raised when configuration is internally inconsistent."""


class ParseError(WaldbrandIndexError, ValueError):
    """Raised when the source document is structurally invalid."""


class IndexUnavailableError(WaldbrandIndexError, RuntimeError):
    """Raised when there is no usable index to serve.

    Happens on first load when nothing could be fetched and nothing is cached,
    or when the very first parse fails.
    """
