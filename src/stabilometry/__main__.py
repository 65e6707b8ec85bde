"""Entry point for python -m stabilometry."""

from stabilometry.cli import main

if __name__ == "__main__":
    main()
