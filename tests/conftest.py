"""Shared fixtures: isolated registries, writers and a scripted frontend."""

import io
import logging

import pytest

from shellkit.commands import CommandRegistry
from shellkit.interface import BaseCLI, Dispatcher
from shellkit.ui import OutputWriter


class ScriptedCLI(BaseCLI):
    """Frontend replaying prepared input; items may be exceptions to raise."""

    def __init__(self, lines):
        super().__init__()
        self.lines = list(lines)
        self.prompts = []
        self.torn_down = 0

    def get_line(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        item = self.lines.pop(0)
        if isinstance(item, BaseException) or (isinstance(item, type) and issubclass(item, BaseException)):
            raise item
        return item

    def teardown(self):
        self.torn_down += 1


@pytest.fixture
def registry():
    return CommandRegistry()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def writer(stream):
    return OutputWriter(stream)


@pytest.fixture
def dispatcher(registry, writer):
    return Dispatcher(registry, writer)


@pytest.fixture
def scripted():
    return ScriptedCLI


@pytest.fixture(autouse=True)
def reset_shellkit_logger():
    """init_logger() detaches 'shellkit' from the root logger; undo it per test."""
    yield
    logger = logging.getLogger("shellkit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
