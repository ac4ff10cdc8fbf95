"""Shared pytest fixtures for FlowState tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from flowstate.timer.engine import TimerEngine

from helpers import ManualTickSource


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def engine(ticks):
    """Fresh TimerEngine driven by a hand-cranked tick source."""
    return TimerEngine(ticks)
