"""Allow ``python -m tokensmith``."""

from .cli import main

if __name__ == "__main__":
    main()
