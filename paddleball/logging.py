"""
PaddleBall logging.

Two channels:

* Console messages through per-module loggers::

      from paddleball.logging import get_logger

      log = get_logger('engine')
      log.info("Goal for %s", 'top')      # -> [engine] INFO: Goal for top

* Structured match records (goals, progression steps, match results) routed
  to sinks. ``FileSink`` appends one JSON object per line to a file per
  module and session::

      from paddleball.logging import emit_record
      emit_record('match', {'type': 'goal', 'scorer': 'top'})

Levels and sinks are configured with ``configure_logging()`` /
``set_module_setting()`` or from the environment:

    PADDLEBALL_LOG_LEVEL=DEBUG              default console level
    PADDLEBALL_LOG_<MODULE>=TRACE           level for one module
    PADDLEBALL_LOG_DIR=/tmp/paddleball      where FileSink writes
    PADDLEBALL_LOGGING_MATCH_ENABLED=true   record match events to a file
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, TextIO

from paddleball import __version__

LEVEL_ENV = 'PADDLEBALL_LOG_LEVEL'
DIR_ENV = 'PADDLEBALL_LOG_DIR'
LEVEL_PREFIX = 'PADDLEBALL_LOG_'
SETTINGS_PREFIX = 'PADDLEBALL_LOGGING_'


class LogLevel(IntEnum):
    """Console levels; numbers line up with the stdlib logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LABELS = {
    LogLevel.TRACE: 'TRACE',
    LogLevel.DEBUG: 'DEBUG',
    LogLevel.INFO: 'INFO',
    LogLevel.WARNING: 'WARN',
    LogLevel.ERROR: 'ERROR',
    LogLevel.CRITICAL: 'CRIT',
}

_ALIASES = {'WARN': LogLevel.WARNING, 'CRIT': LogLevel.CRITICAL}


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S")


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for ``module``."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered records to their destination."""

    @abstractmethod
    def close(self) -> None:
        """Flush and release resources."""

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    JSON Lines files, one per module: ``<session>_<module>.jsonl``.

    Each file opens with a header record and is closed with a footer that
    carries the number of records written. Files are created lazily on the
    first record for a module.

    Args:
        log_dir: Target directory (default: ``get_log_dir()`` at first write)
        session_name: File name prefix (default: local start time)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}
        self._counts: Dict[str, int] = {}

    @property
    def session_name(self) -> str:
        return self._session_name

    def _directory(self) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path(self, module: str) -> Path:
        return self._directory() / f"{self._session_name}_{module}.jsonl"

    def _write(self, module: str, record: Dict[str, Any]) -> None:
        self._files[module].write(json.dumps(record) + "\n")

    def _open(self, module: str) -> None:
        self._files[module] = open(self._path(module), 'a')
        self._counts[module] = 0
        self._write(module, {
            'type': 'header',
            'module': module,
            'session_name': self._session_name,
            'version': __version__,
            'start_time': time.time(),
            'start_time_iso': _now_iso(),
        })

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if module not in self._files:
            self._open(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        self._write(module, record)
        self._counts[module] += 1

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for module, f in self._files.items():
            self._write(module, {
                'type': 'footer',
                'module': module,
                'records': self._counts[module],
                'end_time': time.time(),
                'end_time_iso': _now_iso(),
            })
            f.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by module."""
        return {module: self._path(module) for module in self._files}


class NullSink(LogSink):
    """Accepts and discards records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for ``module`` to ``sink``."""
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Sink for modules without their own."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module, _default_sink)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a structured record to the sink registered for ``module``.

    Returns:
        False when no sink would receive it
    """
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink, the default one included."""
    global _default_sink
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
    if _default_sink is not None:
        _default_sink.close()
        _default_sink = None


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    Build the sink the current settings ask for.

    A FileSink when the module's ``enabled`` setting is true (for example
    from PADDLEBALL_LOGGING_MATCH_ENABLED=true), a NullSink otherwise. A
    ``dir`` setting overrides the log directory.
    """
    settings = get_module_config(module)
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},
}


def get_log_dir() -> str:
    """
    Directory for record files.

    The first of: ``configure_logging(log_dir=...)``, PADDLEBALL_LOG_DIR,
    then the per-user data directory of the platform.
    """
    configured = _config.get('log_dir') or os.environ.get(DIR_ENV)
    if configured:
        return str(Path(configured).expanduser())

    home = Path.home()
    if sys.platform == 'darwin':
        base = home / 'Library' / 'Application Support' / 'PaddleBall'
    elif sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', str(home))) / 'PaddleBall'
    else:
        base = Path(os.environ.get('XDG_DATA_HOME', str(home / '.local' / 'share'))) / 'paddleball'
    return str(base / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Structured-logging settings for ``module`` (empty if none)."""
    return _config['modules'].get(module.lower(), {})


def set_module_setting(module: str, key: str, value: Any) -> None:
    """Set one structured-logging setting, e.g. ``('match', 'enabled', True)``."""
    _config['modules'].setdefault(module.lower(), {})[key] = value


def _parse_level(name: str) -> LogLevel:
    name = name.strip().upper()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return LogLevel[name]
    except KeyError:
        return LogLevel.INFO


def _parse_setting(value: str) -> Any:
    lowered = value.lower()
    if lowered in ('true', '1', 'yes', 'on'):
        return True
    if lowered in ('false', '0', 'no', 'off'):
        return False
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            continue
    return value


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set console levels and the record directory.

    Args:
        level: Default level for every module
        modules: Per-module overrides, e.g. ``{'input': 'TRACE'}``
        log_dir: Directory for FileSink output
    """
    _config['default_level'] = _parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module.lower()] = _parse_level(module_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir


def _apply_environment(environ: Mapping[str, str]) -> None:
    if LEVEL_ENV in environ:
        _config['default_level'] = _parse_level(environ[LEVEL_ENV])
    if DIR_ENV in environ:
        _config['log_dir'] = environ[DIR_ENV]

    for key, value in environ.items():
        if key.startswith(SETTINGS_PREFIX):
            # PADDLEBALL_LOGGING_MATCH_ENABLED -> modules['match']['enabled']
            module, _, setting = key[len(SETTINGS_PREFIX):].lower().partition('_')
            if module and setting:
                set_module_setting(module, setting, _parse_setting(value))
        elif key.startswith(LEVEL_PREFIX) and key not in (LEVEL_ENV, DIR_ENV):
            _config['module_levels'][key[len(LEVEL_PREFIX):].lower()] = _parse_level(value)


_apply_environment(os.environ)


def disable_logging() -> None:
    """Silence console output for modules without an explicit level."""
    _config['default_level'] = LogLevel.OFF


# =============================================================================
# Console loggers
# =============================================================================

class PaddleBallLogger:
    """Prints ``[module] LEVEL: message`` lines above the module's level."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, msg: str, args: tuple, label: Optional[str] = None) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label or _LABELS[level]}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, msg, args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, msg, args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled."""
        self._log(LogLevel.ERROR, msg, args)
        if sys.exc_info()[0] is None:
            return
        for line in traceback.format_exc().rstrip().splitlines():
            self._log(LogLevel.ERROR, line, (), label='TRACE')


@lru_cache(maxsize=64)
def get_logger(module: str) -> PaddleBallLogger:
    """Cached logger for ``module`` (e.g. 'engine', 'input', 'host')."""
    return PaddleBallLogger(module)
