"""CLI commands.

Each module defines one or more click commands registered on the
``overtime-cli`` group in ``src.cli``.
"""
