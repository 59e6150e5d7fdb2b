"""
hashcalc Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m hashcalc`. It delegates to the CLI.
"""

from hashcalc.cli.typer_app import run

if __name__ == "__main__":
    run()
