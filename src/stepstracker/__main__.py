"""Command-line interface."""
import sys

from stepstracker.app.main import main

if __name__ == "__main__":
    sys.exit(main())
