"""log.py - the backbone. logger and tracer.

every pipeline stage runs inside a span. log lines go to stderr so they
never mix with generated code on stdout, and they become span events
on whatever span is current.

in the world: the flight recorder. quiet until something goes wrong.
"""

import sys
from contextlib import contextmanager
from datetime import datetime

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    SimpleSpanProcessor,
    ConsoleSpanExporter,
)

# ============================================================
# TRACER SETUP
# ============================================================

_provider = TracerProvider()
_tracer = _provider.get_tracer("gostub", "0.1.0")
_console_export = False


def enable_console_export():
    """print finished spans to stderr. idempotent."""
    global _console_export
    if not _console_export:
        _provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
        )
        _console_export = True


def add_exporter(exporter):
    """send finished spans somewhere else too, e.g. an OTLP exporter."""
    _provider.add_span_processor(SimpleSpanProcessor(exporter))


# ============================================================
# LOGGER
# ============================================================

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_level = LEVELS["warn"]
_sink = None


def set_level(level: str):
    """show messages at this level and above. unknown names raise."""
    global _level
    if level not in LEVELS:
        raise ValueError(f"unknown log level: {level}. available: {', '.join(LEVELS)}")
    _level = LEVELS[level]


def get_level() -> str:
    for name, value in LEVELS.items():
        if value == _level:
            return name
    return "warn"


def set_sink(fn):
    """register where logs go besides the console. fn(subsystem, level, message, attrs)."""
    global _sink
    _sink = fn


def log(subsystem: str, level: str, message: str, **attrs):
    """log to stderr, record as span event, forward to sink."""
    if LEVELS.get(level, 0) >= _level:
        ts = datetime.now().strftime("%H:%M:%S")
        print(f"[{ts} gostub:{subsystem}] {message}", file=sys.stderr)

    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(
            f"gostub.{subsystem}.{level}",
            attributes={"message": message, "subsystem": subsystem,
                        **{k: str(v) for k, v in attrs.items()}},
        )

    if _sink is not None:
        _sink(subsystem, level, message, attrs if attrs else None)


def debug(subsystem: str, message: str, **attrs):
    log(subsystem, "debug", message, **attrs)


def info(subsystem: str, message: str, **attrs):
    log(subsystem, "info", message, **attrs)


def warn(subsystem: str, message: str, **attrs):
    log(subsystem, "warn", message, **attrs)


def error(subsystem: str, message: str, **attrs):
    log(subsystem, "error", message, **attrs)


# ============================================================
# SPANS
# ============================================================

@contextmanager
def span(name: str, subsystem: str = "gostub", **attrs):
    """one pipeline stage as a span named gostub.<subsystem>.<name>.

        with span("parse", subsystem="gen", filename="add.go"):
            tree = parse_source(text, "add.go")

    log calls inside become events on it, nested spans become children.
    an exception is recorded on the span and propagates.
    """
    with _tracer.start_as_current_span(
        f"gostub.{subsystem}.{name}",
        attributes={f"gostub.{k}": str(v) for k, v in attrs.items()},
    ) as s:
        s.set_attribute("gostub.subsystem", subsystem)
        yield s
