"""Main entry point for the scripta CLI when run as a module."""

from scripta.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
