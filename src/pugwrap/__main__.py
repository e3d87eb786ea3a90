"""Entry point for running pugwrap as a module.

Usage:
    python -m pugwrap [command] [options]

Example:
    python -m pugwrap render views/index.pug --pretty
    python -m pugwrap check
"""

from pugwrap.cli import app

if __name__ == "__main__":
    app()
