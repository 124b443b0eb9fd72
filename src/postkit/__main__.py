"""Allow ``python -m postkit``."""

from postkit.cli import main

if __name__ == "__main__":
    main()
