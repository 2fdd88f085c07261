# src/markup_auditor/controllers/audit_controller.py
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, TextIO

import requests
from tqdm.auto import tqdm

from markup_auditor.dom.qngine import AuditEngine
from markup_auditor.errors import AuditError, InputSourceError
from markup_auditor.managers.config_manager import lookup_nested
from markup_auditor.model import Report, DEFAULT_SOURCE

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class BatchResult(NamedTuple):
    source: str
    report: Optional[Report]
    error: Optional[str]


class AuditController:
    """
    Acquires markup from the supported inputs (raw text, files, URLs,
    streams) and hands it to the AuditEngine.
    """

    def __init__(
            self,
            settings: Optional[Mapping[str, Any]] = None,
            engine: Optional[AuditEngine] = None,
            ignored_codes: Optional[Iterable[str]] = None,
            session: Optional[requests.Session] = None
    ):
        self.settings = dict(settings or {})
        self.engine = engine or AuditEngine(settings=self.settings, ignored_codes=ignored_codes)
        self.session = session or requests.Session()
        self.timeout = lookup_nested(self.settings, 'fetch.timeout', DEFAULT_TIMEOUT)
        user_agent = lookup_nested(self.settings, 'fetch.user_agent')
        if user_agent:
            self.session.headers.update({"User-Agent": user_agent})

    # --- SINGLE INPUTS ---

    def audit_markup(self, raw_html: str, source: str = DEFAULT_SOURCE) -> Report:
        return self.engine.run(raw_html, source)

    def audit_file(self, path) -> Report:
        """Audits a local HTML file; the report is labelled with the file name."""
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            raise InputSourceError(f"File not found: {file_path}")
        try:
            raw_html = file_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            raise InputSourceError(f"Could not read {file_path}: {e}") from e
        logger.debug("Read %d characters from %s", len(raw_html), file_path)
        return self.engine.run(raw_html, file_path.name)

    def audit_url(self, url: str) -> Report:
        """Fetches a page and audits the returned markup; the report is labelled with the URL."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise InputSourceError(f"Could not load URL {url}: {e}") from e

        if not response.ok:
            raise InputSourceError(f"Failed to fetch URL {url}: HTTP {response.status_code} {response.reason}")
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return self.engine.run(response.text, url)

    def audit_stream(self, stream: TextIO, source: str = "stdin") -> Report:
        return self.engine.run(stream.read(), source)

    # --- BATCH ---

    def audit_many(self, paths: Iterable, show_progress: bool = True) -> List[BatchResult]:
        """
        Audits several files. A failing file is recorded with its error
        message instead of aborting the batch.
        """
        paths = list(paths)
        results: List[BatchResult] = []
        for path in tqdm(paths, desc="Auditing", unit="file", disable=not show_progress):
            source = str(path)
            try:
                results.append(BatchResult(source, self.audit_file(path), None))
            except AuditError as e:
                logger.warning("Skipping %s: %s", source, e)
                results.append(BatchResult(source, None, str(e)))
        return results
