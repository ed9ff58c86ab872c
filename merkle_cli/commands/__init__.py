"""
CLI command modules.
"""

from merkle_cli.commands import client, compare, serve, tree, verify

__all__ = ["client", "compare", "serve", "tree", "verify"]
