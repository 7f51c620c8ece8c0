from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blocker import logger
from blocker.errors import ApplyError
from blocker.firewall import Applier


@pytest.fixture
def log_stream():
    """Capture blocker log lines in a StringIO (text format)."""
    stream = io.StringIO()
    old_stream, old_format = logger.LOG_STREAM, logger.LOG_FORMAT
    logger.configure(fmt="text", stream=stream)
    yield stream
    logger.LOG_STREAM, logger.LOG_FORMAT = old_stream, old_format


class RecordingApplier(Applier):
    """Keeps every directive; fails for addresses listed in fail_for."""

    def __init__(self, fail_for=(), raise_for=()):
        self.directives = []
        self.fail_for = set(fail_for)
        self.raise_for = set(raise_for)
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True

    def apply(self, directive):
        self.directives.append(directive)
        if directive.address in self.raise_for:
            raise ApplyError("router said no")
        return directive.address not in self.fail_for

    def close(self):
        self.closed = True


@pytest.fixture
def applier():
    return RecordingApplier()
