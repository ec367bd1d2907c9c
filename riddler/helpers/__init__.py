"""Small shared helpers."""

from riddler.helpers.debug import log_call

__all__ = ["log_call"]
