"""Logging handlers that split project and third-party output.

ModuleDispatchHandler writes project records to one file per MODULE_TO_LOG
entry; ThirdPartyHandler collects everything else (httpx, mcp, ...) in a
single run-3p.log. Both rotate at run boundaries.

These handlers do synchronous file I/O. A graph session spends nearly all
its time waiting on the network or on poll timers, so the few microseconds
per record are not worth a QueueHandler.
"""

import logging
from pathlib import Path
from typing import TextIO

from core.logging.run_manager import (
    is_project_logger,
    module_to_log_name,
    should_rotate,
)


def _rotate_log_file(log_dir: Path, log_name: str, stream: TextIO | None) -> TextIO:
    """Move <name>.log to <name>.previous.log and open a fresh <name>.log.

    Args:
        log_dir: Directory containing log files
        log_name: Base name of the log file (without .log extension)
        stream: Existing stream to close, or None

    Returns:
        New file handle opened for appending.
    """
    current = log_dir / f"{log_name}.log"
    previous = log_dir / f"{log_name}.previous.log"

    if stream:
        stream.close()

    if previous.exists():
        previous.unlink()
    if current.exists():
        current.rename(previous)

    return current.open("a", encoding="utf-8")


class ModuleDispatchHandler(logging.Handler):
    """Route project log records to per-module files.

    Keeps one cached file handle per log name instead of one FileHandler
    per module. Files are opened lazily on first write, and at most two
    exist per name (current and previous run).

    Records from loggers outside the project packages are ignored; pair
    this handler with ThirdPartyHandler to capture them.

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = log_dir
        self._file_cache: dict[str, TextIO] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        if not is_project_logger(record.name):
            return False
        return bool(super().filter(record))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_name = module_to_log_name(record.name)

            if should_rotate(log_name):
                self._rotate_file(log_name)

            file = self._get_or_open_file(log_name)
            file.write(self.format(record) + "\n")
            file.flush()

        except Exception:
            self.handleError(record)

    def _rotate_file(self, log_name: str) -> None:
        existing_stream = self._file_cache.pop(log_name, None)
        self._file_cache[log_name] = _rotate_log_file(self.log_dir, log_name, existing_stream)

    def _get_or_open_file(self, log_name: str) -> TextIO:
        if log_name not in self._file_cache:
            path = self.log_dir / f"{log_name}.log"
            self._file_cache[log_name] = open(path, "a", encoding="utf-8")
        return self._file_cache[log_name]

    def close(self) -> None:
        """Close all cached file handles."""
        self.acquire()
        try:
            for file in self._file_cache.values():
                try:
                    file.close()
                except OSError:
                    pass
            self._file_cache.clear()
        finally:
            self.release()
        super().close()


class ThirdPartyHandler(logging.FileHandler):
    """Collect third-party library records in run-3p.log.

    Project records are filtered out (ModuleDispatchHandler owns them).
    Rotates at run boundaries like ModuleDispatchHandler.
    """

    LOG_NAME = "run-3p"

    def __init__(self, log_dir: Path, **kwargs):
        self.log_dir = log_dir
        log_file = log_dir / f"{self.LOG_NAME}.log"
        super().__init__(log_file, mode="a", encoding="utf-8", delay=True, **kwargs)

    def filter(self, record: logging.LogRecord) -> bool:
        if is_project_logger(record.name):
            return False
        return bool(super().filter(record))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if should_rotate(self.LOG_NAME):
                self.stream = _rotate_log_file(self.log_dir, self.LOG_NAME, self.stream)

            super().emit(record)

        except Exception:
            self.handleError(record)
