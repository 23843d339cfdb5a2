"""
OpenSpaceROI - Structured Logging

Every log entry is:
- Structured (JSON-serializable dict)
- Timestamped
- Module-scoped

Entries are forwarded to the standard logging hierarchy under
``openspace_roi.<module>`` and kept in memory so a caller can inspect
what a computation reported. Failures carry a reason and a suggested fix.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class LogLevel(Enum):
    """Log severity levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    
    @property
    def stdlib_level(self) -> int:
        return getattr(logging, self.value)


class RoiLogger:
    """
    Structured logger for ROI computation modules.
    
    All log entries include:
    - timestamp: ISO 8601 format
    - module: Source module name
    - level: Severity level
    - message: Human-readable message
    - Additional context fields as needed
    """
    
    ROOT_NAME = "openspace_roi"
    
    def __init__(
        self,
        module_name: str,
        log_dir: Optional[Path] = None,
        console_output: bool = True,
        file_output: bool = True,
    ):
        """
        Initialize logger for a specific module.
        
        Args:
            module_name: Name of the module (e.g., "FrameBuilder")
            log_dir: Directory for .jsonl log files (None = no file)
            console_output: Whether to forward entries to the logging hierarchy
            file_output: Whether to write to file
        """
        self.module_name = module_name
        self.console_output = console_output
        self.file_output = file_output
        self.log_dir: Optional[Path] = None
        self._log_file: Optional[Path] = None
        self._entries: list[dict] = []
        self._logger = logging.getLogger(f"{self.ROOT_NAME}.{module_name}")
        
        if log_dir and file_output:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = self.log_dir / f"{module_name.lower()}_{timestamp}.jsonl"
    
    def _format_entry(self, level: LogLevel, message: str, **kwargs: Any) -> dict:
        """Create structured log entry."""
        entry = {
            "timestamp": datetime.now().isoformat(),
            "module": self.module_name,
            "level": level.value,
            "message": message,
        }
        for key, value in kwargs.items():
            if isinstance(value, Path) or hasattr(value, "__dict__"):
                value = str(value)
            entry[key] = value
        return entry
    
    def _output(self, level: LogLevel, entry: dict) -> None:
        """Send entry to configured destinations."""
        if self.console_output:
            context = {
                k: v for k, v in entry.items()
                if k not in ("timestamp", "module", "level", "message")
            }
            if context:
                self._logger.log(
                    level.stdlib_level, "%s | %s",
                    entry["message"], json.dumps(context, default=str),
                )
            else:
                self._logger.log(level.stdlib_level, "%s", entry["message"])
        
        if self._log_file and self.file_output:
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")
        
        self._entries.append(entry)
    
    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        self._output(level, self._format_entry(level, message, **kwargs))
    
    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)
    
    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)
    
    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)
    
    def error(
        self,
        message: str,
        reason: Optional[str] = None,
        suggested_fix: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        """
        Log error message with required context.
        
        Args:
            message: Error description
            reason: Why the error occurred
            suggested_fix: How to potentially fix it
        """
        if reason:
            kwargs["reason"] = reason
        if suggested_fix:
            kwargs["suggested_fix"] = suggested_fix
        self._log(LogLevel.ERROR, message, **kwargs)
    
    def critical(
        self,
        message: str,
        reason: Optional[str] = None,
        suggested_fix: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        """Log critical error - the query must abort."""
        if reason:
            kwargs["reason"] = reason
        if suggested_fix:
            kwargs["suggested_fix"] = suggested_fix
        self._log(LogLevel.CRITICAL, message, **kwargs)
    
    def log_init(self, **params: Any) -> None:
        """Log module initialization with parameters."""
        self.debug(f"{self.module_name} initialized", **params)
    
    def log_input(self, description: str, **data: Any) -> None:
        self.debug(f"Input: {description}", **data)
    
    def log_output(self, description: str, **data: Any) -> None:
        self.debug(f"Output: {description}", **data)
    
    def get_entries(self, level: Optional[LogLevel] = None) -> list[dict]:
        """Get all log entries, optionally filtered by level."""
        if level is None:
            return self._entries.copy()
        return [e for e in self._entries if e["level"] == level.value]
    
    def get_error_count(self) -> int:
        """Count error and critical entries."""
        return sum(
            1 for e in self._entries
            if e["level"] in ("ERROR", "CRITICAL")
        )
    
    def get_summary(self) -> dict:
        """Get summary of all log entries."""
        counts = {level.value: 0 for level in LogLevel}
        for entry in self._entries:
            counts[entry["level"]] += 1
        return {
            "module": self.module_name,
            "total_entries": len(self._entries),
            "by_level": counts,
            "log_file": str(self._log_file) if self._log_file else None,
        }


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a console handler to the package logger (for scripts)."""
    root = logging.getLogger(RoiLogger.ROOT_NAME)
    root.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    root.handlers.clear()
    root.addHandler(handler)
