"""Executable entry point: ``python -m wspick``."""

from wspick.cli import main

if __name__ == "__main__":
    main()
