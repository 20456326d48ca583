"""
Entry point for running safelink as a module.

Usage:
    python -m safelink --help
    python -m safelink list --page 1
    python -m safelink show 4f1c2a
"""

from safelink.cli import cli

if __name__ == "__main__":
    cli()
