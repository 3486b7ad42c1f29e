"""Command-line interface for bodytrace.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for batch tracing
- Verbose/quiet output modes
- Path-only mode for piping into other tools
- Detailed error reporting
"""

from bodytrace.cli.app import cli, main

__all__ = ["cli", "main"]
