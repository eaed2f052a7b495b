"""
Business Layer CLI

Commands:
- analyze: analyze a portfolio snapshot
- score: rank candidate tokens
"""

from src.business.cli.main import cli

__all__ = ["cli"]
