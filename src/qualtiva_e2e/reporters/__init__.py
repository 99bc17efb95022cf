"""Run report generators."""

from .html_reporter import HtmlReporter

__all__ = ["HtmlReporter"]
