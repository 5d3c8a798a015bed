"""Main entry point for loadcli."""
import sys

from loadcli.cli import main


if __name__ == "__main__":
    sys.exit(main())
