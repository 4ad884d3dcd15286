# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""
Logging setup for pursuit runs.

Every component logs under the `sim` namespace. The `scenario.logging`
block of the config decides the console level and whether the run trace
(lifecycle, respawns and, at DEBUG, per-frame steering) is also kept in a
ZIP archive under `logs/`.
"""
from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_NAMESPACE = "sim"
LOG_DIRNAME = "logs"

def _level(value: Any, default: int = logging.INFO) -> int:
    """Level number from a name ("debug", "INFO") or a number; `default` otherwise."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    named = logging.getLevelName(str(value).upper()) if value is not None else None
    return named if isinstance(named, int) else default

def configure_logging(
    settings: Optional[Dict[str, Any]] = None,
    project_root: Optional[str | Path] = None,
    run_label: str = "",
) -> Optional[Path]:
    """
    Install the handlers of one run on the root logger.

    Parameters
    ----------
    settings:
        The `scenario.logging` block. Keys:
        - enabled (bool): keep the trace in a ZIP archive (default: False)
        - level (str|int): console level (default: "INFO")
        - file_level (str|int): archive level (default: level)
        - to_console (bool): echo records to stderr (default: True)
    project_root:
        Directory holding `logs/`; the repository root when omitted.
    run_label:
        Suffix of the archive name, typically the seed of the run.

    Returns the archive path, or None when the trace is not kept. The
    archive itself is only created by the first record.
    """
    settings = settings or {}
    console_level = _level(settings.get("level"))
    handlers: list[logging.Handler] = []

    if settings.get("to_console", True):
        handlers.append(logging.StreamHandler())
        handlers[-1].setLevel(console_level)

    archive = None
    if settings.get("enabled", False):
        root = Path(project_root).resolve() if project_root else Path(__file__).resolve().parents[1]
        archive = run_archive_path(root / LOG_DIRNAME, run_label)
        handlers.append(_ZipTraceHandler(archive, _level(settings.get("file_level"), console_level)))

    if not handlers:
        handlers.append(logging.NullHandler(console_level))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    lowest = min(handler.level for handler in handlers)
    logging.basicConfig(level=lowest, handlers=handlers, force=True)
    logging.getLogger(LOG_NAMESPACE).setLevel(lowest)
    return archive

def run_archive_path(log_dir: Path, run_label: str = "") -> Path:
    """`<log_dir>/<YYYYmmdd-HHMMSS>[_<run_label>].log.zip`"""
    stem = datetime.now().strftime("%Y%m%d-%H%M%S")
    if run_label:
        stem = f"{stem}_{run_label}"
    return log_dir / f"{stem}.log.zip"

def get_logger(component: str) -> logging.Logger:
    """Logger `sim.<component>`; the bare `sim` logger for an empty name."""
    component = component.strip(".")
    return logging.getLogger(f"{LOG_NAMESPACE}.{component}" if component else LOG_NAMESPACE)

def log_scenario_settings(logger: logging.Logger, settings: Any, seed: Optional[int] = None) -> None:
    """One INFO line with every scenario constant, so a trace says how it was produced."""
    values = ", ".join(f"{f.name}={getattr(settings, f.name)!r}" for f in fields(settings) if f.name != "seed")
    logger.info("Scenario (seed=%s): %s", seed, values)

class _ZipTraceHandler(logging.Handler):
    """
    Handler writing the formatted records into a single member of a ZIP
    archive. Nothing touches the disk until the first record is emitted.
    """

    def __init__(self, archive_path: Path, level: int) -> None:
        super().__init__(level)
        self.archive_path = archive_path
        self.records_written = 0
        self._archive: Optional[zipfile.ZipFile] = None
        self._member: Optional[io.TextIOWrapper] = None

    @property
    def member_name(self) -> str:
        """Name of the text member inside the archive (the archive name minus `.zip`)."""
        return self.archive_path.name.removesuffix(".zip")

    def _open_member(self) -> io.TextIOWrapper:
        self.archive_path.parent.mkdir(parents=True, exist_ok=True)
        self._archive = zipfile.ZipFile(self.archive_path, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=9)
        self._member = io.TextIOWrapper(self._archive.open(self.member_name, mode="w"), encoding="utf-8")
        return self._member

    def emit(self, record: logging.LogRecord) -> None:
        try:
            member = self._member or self._open_member()
            member.write(f"{self.format(record)}\n")
            member.flush()
            self.records_written += 1
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        if self._member is not None:
            self._member.flush()

    def close(self) -> None:
        try:
            if self._member is not None:
                self._member.close()
            if self._archive is not None:
                self._archive.close()
        finally:
            self._member = None
            self._archive = None
        super().close()
