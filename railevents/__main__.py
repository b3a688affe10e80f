"""
Package entry point.

Allows running the application via:

    python -m railevents build

This simply forwards execution to railevents.cli.main().
"""

from railevents.cli import main

if __name__ == "__main__":
    main()
