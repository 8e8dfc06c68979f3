"""priceprism command line interface."""

from priceprism.cli.main import app, create_app

__all__ = ["app", "create_app"]
