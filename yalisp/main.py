"""
Command-line entry point.

Configures logging, resolves the shell configuration and either evaluates the
expressions given with -e/--eval or starts the interactive REPL.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from yalisp.config.logging_config import get_logger, setup_logging
from yalisp.config.repl_config import load_config
from yalisp.repl.repl import Repl

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="yalisp", description="Yet Another Lisp interpreter.")
    parser.add_argument("-e", "--eval", dest="expressions", action="append", metavar="EXPR",
                        help="evaluate EXPR and print the result (repeatable); skips the interactive shell")
    parser.add_argument("--log-level", help="logging level (env: YALISP_LOG_LEVEL, default WARNING)")
    parser.add_argument("--log-file", help="write logs to this file (env: YALISP_LOG_FILE)")
    parser.add_argument("--buffer-size", type=int, help="line buffer size in bytes (env: YALISP_BUFFER_SIZE, default 1024)")
    parser.add_argument("--prompt", help="interactive prompt (env: YALISP_PROMPT)")
    parser.add_argument("--fix-minus-message", action="store_true", default=None,
                        help="report '-' type mismatches under '-' rather than the legacy '+' text")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Runs the interpreter. Returns the process exit status."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    try:
        config = load_config({
            "log_level": args.log_level,
            "log_file": args.log_file,
            "buffer_size": args.buffer_size,
            "prompt": args.prompt,
            "fix_minus_message": args.fix_minus_message,
        })
    except ValidationError as e:
        arg_parser.error(f"invalid configuration:\n{e}")

    setup_logging(config.log_level, config.log_file)
    repl = Repl(config=config)

    if args.expressions:
        for expression in args.expressions:
            try:
                repl.process_input(expression)
            except SystemExit:
                # /exit stops the batch; errors printed so far still count.
                break
        logger.info(f"Processed -e expressions, {repl.errors} error(s)")
        return 1 if repl.errors else 0

    repl.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
