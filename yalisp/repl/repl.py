"""REPL interface for interactive YALisp sessions."""
import logging
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.tree import Tree

from yalisp.config.logging_config import set_level
from yalisp.sexp_evaluator.sexp_evaluator import SexpEvaluator
from yalisp.sexp_parser.sexp_parser import Cursor, parse
from yalisp.system.models import ListNode, ReplConfig, StringLiteral, SymbolNode, SyntaxNode

logger = logging.getLogger(__name__)

BANNER = (
    "Welcome to Yet Another Lisp (YALisp)!\n"
    "Type in lisp expressions, and I'll execute them :3"
)


class Repl:
    """Interactive REPL (Read-Eval-Print Loop) interface.

    Each input line is one interpretation cycle: parse one expression,
    evaluate it, print the value or "Error: <message>". A failing line never
    ends the session.
    """

    def __init__(self, config: Optional[ReplConfig] = None, output_stream=None,
                 input_func: Callable[[str], str] = input):
        """Initialize the REPL interface.

        Args:
            config: Shell settings (defaults to ReplConfig())
            output_stream: Optional output stream (defaults to sys.stdout)
            input_func: Line reader taking the prompt (defaults to input)
        """
        self.config = config or ReplConfig()
        self.output = output_stream or sys.stdout
        self.input_func = input_func
        self.verbose = False
        # Error lines printed so far; -e mode derives its exit status from this.
        self.errors = 0
        self.evaluator = SexpEvaluator(fix_minus_message=self.config.fix_minus_message)
        self.commands = {
            "/help": self._cmd_help,
            "/exit": self._cmd_exit,
            "/ast": self._cmd_ast,
            "/verbose": self._cmd_verbose,
        }

    def start(self) -> None:
        """Start the REPL interface.

        Prints the banner, then reads and processes lines until EOF,
        Ctrl-C or /exit.
        """
        print(BANNER, file=self.output)
        logger.info("REPL started")

        while True:
            try:
                user_input = self.input_func(self.config.prompt)
            except (KeyboardInterrupt, EOFError):
                print("\nExiting...", file=self.output)
                break
            self.process_input(user_input)

    def process_input(self, user_input: str) -> Optional[str]:
        """Process one line of user input.

        Commands (lines starting with '/') are dispatched; anything else is
        interpreted. Returns the printed result line, the error line of a
        failed command, or None when nothing was interpreted.

        Blank lines are skipped on purpose: they print nothing and are not
        counted as errors, instead of being parsed and reported as
        "Error: Unexpected end of input".
        """
        if len(user_input.encode("utf-8")) > self.config.max_line_length:
            return self._emit(f"Error: Input line exceeds {self.config.max_line_length} bytes")

        stripped = user_input.strip()
        if not stripped:
            return None

        if stripped.startswith("/"):
            return self._handle_command(stripped)

        return self._emit(self.interpret(user_input))

    def interpret(self, line: str) -> str:
        """Runs one parse/evaluate cycle and returns the text to print.

        Text after the first complete expression is ignored.
        """
        logger.debug(f"Interpreting line: {line!r}")
        try:
            parse_outcome = parse(line, Cursor())
            if parse_outcome.is_error:
                return f"Error: {parse_outcome.error.message}"
            return self.evaluator.evaluate(parse_outcome.node).render()
        except RecursionError:
            logger.error("Nesting too deep for the host stack")
            return "Error: Maximum nesting depth exceeded"
        except Exception as e:
            logger.exception(f"Unexpected error while interpreting {line!r}")
            return f"Error: Internal error: {e}"

    def _emit(self, text: str) -> str:
        if text.startswith("Error: "):
            self.errors += 1
        print(text, file=self.output)
        return text

    def _handle_command(self, command: str) -> Optional[str]:
        """Handle a command input.

        Args:
            command: Command from the user

        Returns:
            The error line printed by the command, if it failed
        """
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in self.commands:
            return self.commands[cmd](args)

        error = self._emit(f"Error: Unknown command: {cmd}")
        print("Type /help for available commands", file=self.output)
        return error

    def _cmd_help(self, args: str) -> None:
        """Handle the help command."""
        print("Available commands:", file=self.output)
        print("  /help - Show this help", file=self.output)
        print("  /ast EXPR - Show the syntax tree of EXPR without evaluating it", file=self.output)
        print("  /verbose [on|off] - Toggle debug logging of each line", file=self.output)
        print("  /exit - Exit the REPL", file=self.output)
        print("Operators: " + ", ".join(self.evaluator.PRIMITIVE_APPLIERS), file=self.output)

    def _cmd_ast(self, args: str) -> Optional[str]:
        """Handle the ast command: parse only, then draw the tree."""
        if not args:
            return self._emit("Error: Usage: /ast EXPR")

        try:
            outcome = parse(args, Cursor())
            if outcome.is_error:
                return self._emit(f"Error: {outcome.error.message}")
            tree = _build_tree(outcome.node)
        except RecursionError:
            logger.error("Nesting too deep for the host stack")
            return self._emit("Error: Maximum nesting depth exceeded")

        console = Console(file=self.output, highlight=False, markup=False)
        console.print(tree)
        return None

    def _cmd_verbose(self, args: str) -> Optional[str]:
        """Handle the verbose command.

        Args:
            args: Command arguments
        """
        if not args:
            self.verbose = not self.verbose
        elif args.lower() in ["on", "true", "yes", "1"]:
            self.verbose = True
        elif args.lower() in ["off", "false", "no", "0"]:
            self.verbose = False
        else:
            error = self._emit(f"Error: Invalid option: {args}")
            print("Usage: /verbose [on|off]", file=self.output)
            return error

        set_level("DEBUG" if self.verbose else self.config.log_level)
        print(f"Verbose mode: {'on' if self.verbose else 'off'}", file=self.output)
        return None

    def _cmd_exit(self, args: str) -> None:
        """Handle the exit command."""
        print("Exiting...", file=self.output)
        sys.exit(0)


def _node_label(node: SyntaxNode) -> str:
    if isinstance(node, ListNode):
        return f"list {node.summary()}"
    if isinstance(node, SymbolNode):
        return f"symbol {node.name}"
    if isinstance(node, StringLiteral):
        return f'string "{node.text}"'
    return f"int {node.value}"


def _build_tree(node: SyntaxNode, tree: Optional[Tree] = None) -> Tree:
    branch = Tree(_node_label(node)) if tree is None else tree.add(_node_label(node))
    if isinstance(node, ListNode):
        for item in node.items:
            _build_tree(item, branch)
    return branch
