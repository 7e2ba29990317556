from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from ..parsers.jsonl import JSONLinesParser
from .models import SearchConfig
from .reporting import ConsoleReporter
from .searcher import RecordSearcher
from .utils import detect_encoding, list_json_files


DEFAULT_LOGGER_NAME = "hogsearch"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0
LINE_SNIPPET_CHARS = 80


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Errors and per-line parse problems are reported at WARNING and above, so
    they show up without ``verbose``. ``verbose`` adds per-file progress at
    INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


class FileScanner:
    """Scans one newline-delimited JSON file and reports matching records.

    Nothing is returned: matches go to the reporter and every failure is
    logged. Open and read errors end the current file only; a bad line is
    logged and scanning continues with the next one.
    """

    def __init__(
        self,
        config: SearchConfig,
        reporter: ConsoleReporter,
        *,
        parser: Optional[JSONLinesParser] = None,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
    ) -> None:
        self.config = config
        self.reporter = reporter
        self.searcher = RecordSearcher(config, reporter)
        self.parser = parser or JSONLinesParser()
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def scan(self, path: Path) -> None:
        start_time = time.perf_counter()
        try:
            encoding = detect_encoding(path)
            # undecodable bytes become U+FFFD
            handle = path.open("r", encoding=encoding, errors="replace", newline="\n")
        except OSError as exc:
            self.logger.error("Error opening file %s (%s): %s", path.name, path, exc)
            return

        record_count = 0
        match_count = 0
        bad_lines = 0
        with handle:
            self.reporter.file_banner(path)
            try:
                for record in self.parser.parse(path, handle):
                    if record.error is not None:
                        bad_lines += 1
                        self.logger.warning(
                            "Error parsing JSON at line %d in file %s: %s (line starts %r)",
                            record.line_num,
                            path.name,
                            record.error,
                            record.text[:LINE_SNIPPET_CHARS],
                        )
                        continue
                    record_count += 1
                    try:
                        if self.searcher.search(record):
                            match_count += 1
                    except RecursionError:
                        bad_lines += 1
                        self.logger.warning(
                            "Error handling record at line %d in file %s: JSON nesting too deep",
                            record.line_num,
                            path.name,
                        )
            except OSError as exc:
                self.logger.error("Error reading file %s: %s", path.name, exc)

        if self.verbose:
            self.logger.info(
                "Finished %s: %d record(s), %d match(es), %d unparseable line(s)",
                path.name,
                record_count,
                match_count,
                bad_lines,
            )
        self._maybe_log_slow_file(path, time.perf_counter() - start_time, record_count)

    def _maybe_log_slow_file(self, path: Path, duration: float, record_count: int) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        if duration < self._slow_log_threshold:
            return
        try:
            size_str = f"{path.stat().st_size:,} bytes"
        except OSError:
            size_str = "unknown size"
        self.logger.debug(
            "Slow scan for %s took %.2fs. size=%s, records=%d, field=%s",
            path.name,
            duration,
            size_str,
            record_count,
            self.config.field or "<whole record>",
        )


class DirectoryScanner:
    """Fans the ``*.json`` files of one directory out to a pool of workers."""

    def __init__(
        self,
        root: Path,
        config: SearchConfig,
        reporter: Optional[ConsoleReporter] = None,
        workers: int = 1,
        *,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
        show_progress: bool = False,
        progress_desc: str = "Searching files",
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.root = root
        self.config = config
        self.reporter = reporter or ConsoleReporter()
        self.workers = workers
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        if verbose:
            self.logger.setLevel(logging.INFO)
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc
        self.file_scanner = FileScanner(
            config, self.reporter, logger=base_logger, verbose=verbose
        )

    def discover(self) -> List[Path]:
        """Raises ``OSError`` if the directory cannot be listed."""
        files = list_json_files(self.root)
        if self.verbose:
            self.logger.info("Discovered %d JSON file(s) in %s", len(files), self.root)
        return files

    def scan(self) -> None:
        self.scan_files(self.discover())

    def scan_files(self, files: Sequence[Path]) -> None:
        if not files:
            return

        progress_bar = None
        if self.show_progress:
            progress_bar = tqdm(total=len(files), desc=self.progress_desc, unit="file")

        executor = ThreadPoolExecutor(max_workers=self.workers)
        try:
            futures = {executor.submit(self.file_scanner.scan, path): path for path in files}
            for future in as_completed(futures):
                path = futures[future]
                try:
                    future.result()
                except Exception as exc:
                    if self.verbose:
                        self.logger.exception("Error scanning %s", path)
                    else:
                        self.logger.error("Error scanning %s: %s", path, exc)
                finally:
                    if progress_bar is not None:
                        progress_bar.update(1)
        except KeyboardInterrupt:
            if self.verbose:
                self.logger.info("Search interrupted by user; shutting down workers")
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
            if progress_bar is not None:
                progress_bar.close()


class SingleFileScanner:
    def __init__(
        self,
        file_path: Path,
        config: SearchConfig,
        reporter: Optional[ConsoleReporter] = None,
        *,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
    ) -> None:
        self.file_path = file_path
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        if verbose:
            self.logger.setLevel(logging.INFO)
        self.file_scanner = FileScanner(
            config, reporter or ConsoleReporter(), logger=base_logger, verbose=verbose
        )

    def scan(self) -> None:
        try:
            self.file_scanner.scan(self.file_path)
        except Exception as exc:
            if self.verbose:
                self.logger.exception("Error scanning %s", self.file_path)
            else:
                self.logger.error("Error scanning %s: %s", self.file_path, exc)
