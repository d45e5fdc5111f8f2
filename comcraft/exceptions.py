"""
Error types surfaced by the persistence boundary.

Bad quote input is never an error (invalid selections are skipped), so the
only failures modelled here are infrastructure ones.
"""


class PersistenceError(Exception):
    """The row store could not complete a read or write."""


class LookupUnavailableError(PersistenceError):
    """A read-only permission lookup failed; callers treat it as "no rule"."""
