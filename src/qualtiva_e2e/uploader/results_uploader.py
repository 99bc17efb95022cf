"""Post JUnit result files to the results endpoint."""

import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx

from qualtiva_e2e.config.settings import UploaderSettings
from qualtiva_e2e.exceptions import UploadError
from qualtiva_e2e.models.run_models import UploadOutcome, UploadReport, UploadResult

logger = logging.getLogger(__name__)


class ResultsUploader:
    """
    Upload recent JUnit XML files, one POST per file.

    PATTERN: Sync httpx client with basic auth, one request per file
    GOTCHA: Only 2xx counts as uploaded; other statuses are reported, never raised
    GOTCHA: A failing file never stops the batch
    """

    def __init__(self, settings: UploaderSettings, client: Optional[httpx.Client] = None):
        """
        Initialize the uploader.

        Args:
            settings: Endpoint, credentials, header metadata and file selection
            client: HTTP client to use; one is created (and owned) if omitted

        Raises:
            UploadError: If the endpoint or credentials are missing
        """
        missing = settings.missing_fields()
        if missing:
            raise UploadError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        self.settings = settings
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=settings.timeout_seconds)
        self.auth = httpx.BasicAuth(settings.user, settings.password)

    def __enter__(self) -> "ResultsUploader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def build_headers(self) -> Dict[str, str]:
        s = self.settings
        return {
            "Content-Type": "application/xml",
            "Test-Engine-Result-Format": s.result_format,
            "Test-Engine": s.test_engine,
            "Tags": s.tags,
            "aqa-team": s.team,
            "aqa-project": s.project,
            "aqa-application": s.application,
            "aqa-product": s.product,
            "aqa-environment": s.environment,
        }

    def find_result_files(self, now: Optional[float] = None) -> Tuple[List[Path], List[Path]]:
        """
        Split matching result files into fresh and stale ones.

        Args:
            now: Reference timestamp (defaults to the current time)

        Returns:
            Tuple of (files to upload, files older than the age cutoff)
        """
        results_dir = Path(self.settings.results_dir)
        if not results_dir.is_dir():
            logger.warning(f"Results directory not found: {results_dir}")
            return [], []

        now = time.time() if now is None else now
        cutoff = now - self.settings.max_age_minutes * 60

        fresh, stale = [], []
        for path in sorted(results_dir.glob(self.settings.file_pattern)):
            if not path.is_file():
                continue
            if path.stat().st_mtime < cutoff:
                logger.info(f"Skipping {path.name}: older than {self.settings.max_age_minutes:g} minutes")
                stale.append(path)
            else:
                fresh.append(path)
        return fresh, stale

    def upload_file(self, path: Path) -> UploadResult:
        """POST one file; never raises for HTTP or file errors."""
        logger.info(f"Uploading {path.name} to {self.settings.endpoint}")
        try:
            response = self.client.post(
                self.settings.endpoint,
                content=path.read_bytes(),
                headers=self.build_headers(),
                auth=self.auth,
            )
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"Failed to upload {path.name}: {e}")
            return UploadResult(path=path, outcome=UploadOutcome.FAILED, message=str(e))

        status = response.status_code
        if 200 <= status < 300:
            logger.info(f"Uploaded {path.name} (HTTP {status})")
            return UploadResult(
                path=path, outcome=UploadOutcome.UPLOADED, status_code=status
            )

        message = f"Unexpected response for {path.name}: HTTP {status}"
        logger.error(message)
        if status == 404:
            hint = f"Endpoint not found; check AQA_ENDPOINT ({self.settings.endpoint})"
            logger.error(hint)
            message = f"{message}. {hint}"
        return UploadResult(
            path=path,
            outcome=UploadOutcome.UNEXPECTED_STATUS,
            status_code=status,
            message=message,
        )

    def upload_all(self, now: Optional[float] = None) -> UploadReport:
        """Upload every fresh result file and report per-file outcomes."""
        fresh, stale = self.find_result_files(now)
        if not fresh:
            logger.warning(
                f"No result files matching {self.settings.file_pattern} "
                f"in {self.settings.results_dir} to upload"
            )

        report = UploadReport(skipped=stale)
        for path in fresh:
            report.results.append(self.upload_file(path))

        uploaded, not_uploaded, skipped = report.counts()
        logger.info(
            f"Upload finished: {uploaded} uploaded, {not_uploaded} not uploaded, {skipped} skipped"
        )
        return report
