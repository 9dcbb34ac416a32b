"""Entry point for python -m simbook execution.

This module allows running simbook as a module:
    python -m simbook capacity
    python -m simbook list
    python -m simbook --help
"""

from simbook.cli import run

if __name__ == "__main__":
    run()
