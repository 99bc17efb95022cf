"""Allow ``python -m qualtiva_e2e.cli``."""

from .app import main

if __name__ == "__main__":
    main()
