"""
This is an interpreter for the Moth programming language.

{0}

For example:

    moth run program.moth

will run program.moth if possible, or else try to explain why not.

    moth repl

starts an interactive session, and

    moth eval "1 + 2 * 3"

evaluates a single expression. If the expression begins with a minus sign,
put -- ahead of it so it is not taken for an option:

    moth eval -- "-2 * 3"
"""
import sys, argparse
from pathlib import Path

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70

PROMPT = "moth> "

parser = argparse.ArgumentParser(
	prog="moth",
	description="A programming language for moths and cats alike.",
)
parser.add_argument('-t', "--tokens", action="store_true", help="Show the tokens the scanner finds.")
parser.add_argument('-p', "--parse", action="store_true", help="Show the parse results, rendered back into source.")
parser.add_argument('-n', "--dry-run", action="store_true", help="Check the program but do not actually run it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what each phase is up to.")
subparsers = parser.add_subparsers(dest="command")
run_parser = subparsers.add_parser("run", help="Run a .moth file")
run_parser.add_argument("program", help="try examples/closures.moth for example.")
subparsers.add_parser("repl", help="Interactive read-eval-print loop")
eval_parser = subparsers.add_parser("eval", help="Evaluate a single Moth expression")
eval_parser.add_argument("expression", help="Put -- first if the expression starts with a minus sign.")

def _session(args):
	from .diagnostics import Report
	from .executive import Session
	report = Report(verbose=args.verbose)
	return Session(report, show_tokens=args.tokens, show_parse=args.parse, dry_run=args.dry_run)

def run_file(args):
	from .executive import State
	session = _session(args)
	path = Path.cwd() / args.program
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as ex:
		print("Can't read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return EXIT_STATIC_ERROR
	state = session.run(text, path)
	session.report.complain_to_console()
	if state is State.HALTED_ON_STATIC_ERROR: return EXIT_STATIC_ERROR
	if state is State.HALTED_ON_RUNTIME_ERROR: return EXIT_RUNTIME_ERROR

def run_prompt(args):
	session = _session(args)
	while True:
		try:
			line = input(PROMPT)
		except EOFError:
			print()
			return
		session.run(line)
		session.report.complain_to_console()

def run_expression(args):
	from .executive import State
	from .interpreter import stringify
	session = _session(args)
	state, value = session.evaluate(args.expression)
	session.report.complain_to_console()
	if state is State.HALTED_ON_STATIC_ERROR: return EXIT_STATIC_ERROR
	if state is State.HALTED_ON_RUNTIME_ERROR: return EXIT_RUNTIME_ERROR
	if not args.dry_run:
		print(stringify(value))

COMMANDS = {
	"run": run_file,
	"repl": run_prompt,
	"eval": run_expression,
}

def main():
	if len(sys.argv) > 1:
		args = parser.parse_args()
		if args.command is None:
			parser.error("Say which command: run, repl, or eval.")
		sys.exit(COMMANDS[args.command](args))
	else:
		print(__doc__.strip().format(parser.format_usage()))
