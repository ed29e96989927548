"""Entry point for the lifedash CLI.

Usage:
    python -m lifedash.interfaces.cli.main

Or via installed entry point:
    lifedash <command>
"""

from lifedash.interfaces.cli import app


def main() -> None:
    """Run the lifedash CLI application."""
    app()


if __name__ == "__main__":
    main()
