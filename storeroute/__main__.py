"""Entry point for ``python -m storeroute``."""

from storeroute.cli import main

if __name__ == "__main__":
    main()
