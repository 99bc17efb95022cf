"""Load the suite plugin for every test under this directory."""

pytest_plugins = ["qualtiva_e2e.pytest_plugin"]
