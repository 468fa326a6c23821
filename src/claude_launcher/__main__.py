"""Allow ``python -m claude_launcher``."""

from .cli import main

if __name__ == "__main__":
    main()
