"""Entry point for ``python -m pyprofi``."""

from pyprofi.cli import main

if __name__ == "__main__":
    main()
