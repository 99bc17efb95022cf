"""JUnit results uploader."""

from .results_uploader import ResultsUploader

__all__ = ["ResultsUploader"]
