"""Allow running the level generator as `python -m ascent`."""

from .cli import main

if __name__ == "__main__":
    main()
