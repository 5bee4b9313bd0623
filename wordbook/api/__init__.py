"""HTTP API for word suggestions."""

from .suggestion_endpoint import SUGGESTION_ROUTE, create_app

__all__ = ["SUGGESTION_ROUTE", "create_app"]
