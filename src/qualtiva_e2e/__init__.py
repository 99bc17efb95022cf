"""End-to-end browser suite for the Qualtiva Solutions marketing website.

The suite itself lives in ``tests/e2e`` and runs on pytest-playwright. This
package holds everything around it:
- Browser/device profiles and run configuration
- Global setup (health check) and teardown (run summary)
- A pytest plugin wiring profiles into pytest-playwright fixtures
- The operator CLI that runs profile sessions and renders the HTML report
- The JUnit results uploader
"""

__version__ = "0.1.0"
