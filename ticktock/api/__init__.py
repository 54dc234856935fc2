"""HTTP API for ticktock."""

from ticktock.api.app import create_app

__all__ = ["create_app"]
