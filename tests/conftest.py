import pytest
from io import StringIO

from yalisp.repl.repl import Repl
from yalisp.sexp_evaluator.sexp_evaluator import SexpEvaluator
from yalisp.sexp_parser.sexp_parser import SexpParser
from yalisp.system.models import ReplConfig


@pytest.fixture
def parser():
    """Provides a SexpParser instance for tests."""
    return SexpParser()


@pytest.fixture
def evaluator():
    """Provides a SexpEvaluator with the default (legacy) '-' message."""
    return SexpEvaluator()


@pytest.fixture
def output_stream():
    """Captures everything the REPL prints."""
    return StringIO()


@pytest.fixture
def repl_config():
    """Default shell configuration."""
    return ReplConfig()


@pytest.fixture
def repl_instance(repl_config, output_stream):
    """Provides a Repl writing into output_stream."""
    return Repl(config=repl_config, output_stream=output_stream)
