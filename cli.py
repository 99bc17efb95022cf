#!/usr/bin/env python
"""
Qualtiva website test runner entry point.

Usage:
    python cli.py all                # All tests on all browser profiles
    python cli.py mobile             # Mobile and tablet profiles only
    python cli.py performance        # One category on all profiles
    python cli.py upload             # Post recent JUnit results
"""

from qualtiva_e2e.cli.app import main

if __name__ == "__main__":
    main()
