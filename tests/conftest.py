"""
Pytest fixtures for the C- parser tests.
"""

import logging

import pytest

from cminus import Parser, Scanner
from cminus.logging_config import LOGGER_NAME


SIMPLE_PROGRAM = "Program P { int x; x = 1 } ."

FULL_PROGRAM = """\
Program Demo {
  int x;
  float y[10];
  int i;
  /* loop over the array */
  i = 0
  while (i <= 10) {
    y[i] = (x + i) * 2 / 3
    i = i + 1
  }
  while (i >= 0) i = i - 1
  if (x == i) x = y[2] - 1 else { x = 0 }
  if (x != 1) if (x < 2) x = x else x = 3
  if (x > 4) { }
} .
"""


@pytest.fixture
def simple_program():
    return SIMPLE_PROGRAM


@pytest.fixture
def full_program():
    return FULL_PROGRAM


@pytest.fixture
def sub_parser():
    """Parser positioned on the first token of a fragment, for calling one rule directly."""
    def make(text, config=None):
        parser = Parser(Scanner(text), config)
        parser.advance()
        return parser
    return make


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI configures the package logger; undo that between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
