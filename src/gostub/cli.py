"""gostub CLI: unified entry point.

Usage:
    gostub gen -i add.go                      # tests for every function
    gostub gen -i add.go -f Add,Sum           # tests for named functions
    gostub gen -i add.go -l 12,30 --stdout    # functions declared on lines
    gostub gen --json < requests.jsonl        # JSON requests on stdin
    gostub template add my_template.tmpl      # install a template
    gostub template list                      # installed templates
    gostub template use my_template           # make it the default
    gostub template remove my_template        # uninstall
"""

import argparse
import os
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from gostub.config import load_config
from gostub.errors import GostubError, UsageError
from gostub.gen.codegen import Options, generate_file
from gostub.gen.imports import normalizer
from gostub.gen.protocol import serve
from gostub.gen.selector import parse_functions, parse_lines
from gostub.gen.store import DEFAULT_TEMPLATE, TemplateStore
from gostub.log import enable_console_export, error, set_level
from gostub.paths import gostub_home


# ============================================================
# HELPERS
# ============================================================

def _setup(args):
    """load config, apply log level and tracing. returns (config, store)."""
    home = gostub_home()
    config = load_config(home)
    try:
        set_level("debug" if getattr(args, "verbose", False) else config["log_level"])
    except ValueError as e:
        raise UsageError(str(e)) from e
    if os.environ.get("GOSTUB_TRACE"):
        enable_console_export()
    return config, TemplateStore(home)


def _template_text(args, config, store: TemplateStore) -> str | None:
    """template text for this run. None means the built-in one."""
    name = args.template or config["template"]
    if not args.template and name not in store.names():
        name = store.current()
    if name == DEFAULT_TEMPLATE:
        return None
    return store.get(name)


def _normalizer(args, config):
    if args.no_format:
        return None
    return normalizer(config["normalizer"])


# ============================================================
# COMMANDS
# ============================================================

def cmd_gen(args) -> int:
    """Generate test stubs."""
    config, store = _setup(args)
    template = _template_text(args, config, store)
    normalize = _normalizer(args, config)
    comment = args.comment if args.comment is not None else config["comment"]

    if args.json:
        serve(sys.stdin, sys.stdout, template, normalize)
        return 0

    if not args.input:
        raise UsageError("missing input file")

    options = Options(
        input_file=args.input,
        output_file=args.output,
        lines=parse_lines(args.lines) if args.lines else [],
        functions=parse_functions(args.functions) if args.functions else [],
        all=True if args.all else None,
        comment=comment,
        template=template,
        use_stdin=args.stdin,
        use_stdout=args.stdout,
    )

    result = generate_file(options, stdin=sys.stdin, normalize=normalize)

    if args.stdout:
        sys.stdout.write(result.code)
    elif result.written:
        print(f"\n  Generated {len(result.tests)} test(s) -> {result.filepath}\n")
        for name in result.tests:
            print(f"    {name}")
        print()
    else:
        print(f"\n  Nothing to generate: selected functions already have tests in {result.filepath}\n")
    return 0


def cmd_template_add(args) -> int:
    """Install a template file."""
    config, store = _setup(args)
    normalize = normalizer(config["normalizer"]) if args.strict else None
    t = store.add(args.file, normalize)
    print(f"\n  Installed template {t.name}\n")
    return 0


def cmd_template_list(args) -> int:
    """Show installed templates, the selected one marked."""
    _, store = _setup(args)
    current = store.current()

    table = Table(title="gostub templates installed")
    table.add_column("", width=2)
    table.add_column("#", justify="right")
    table.add_column("name")
    for i, name in enumerate(store.names(), 1):
        label = "standard preinstalled template" if name == DEFAULT_TEMPLATE else ""
        table.add_row("=>" if name == current else "", str(i), f"{name} {label}".strip())
    Console().print(table)
    return 0


def cmd_template_use(args) -> int:
    """Select the default template."""
    _, store = _setup(args)
    store.use(args.name)
    print(f"\n  Using template {args.name}\n")
    return 0


def cmd_template_remove(args) -> int:
    """Uninstall a template."""
    _, store = _setup(args)
    store.remove(args.name)
    print(f"\n  Removed template {args.name}\n")
    return 0


# ============================================================
# PARSERS
# ============================================================

def _build_parsers(subparsers):
    p = subparsers.add_parser("gen", help="Generate test stub(s)")
    p.add_argument("-i", dest="input", default="", help="input file name")
    p.add_argument("-o", dest="output", default="", help="output file name (default: <input>_test.go)")
    p.add_argument("-l", dest="lines", default="",
                   help="comma-separated line numbers (starting with 1) to look for the function declarations")
    p.add_argument("-f", dest="functions", default="", help="comma-separated function names to generate tests for")
    p.add_argument("-all", "--all", dest="all", action="store_true",
                   help="generate tests for all functions (default when no -l/-f)")
    p.add_argument("-c", dest="comment", default=None, help="comment inserted into the generated test")
    p.add_argument("-t", "--template", default="", help="installed template to use")
    p.add_argument("--stdin", action="store_true", help="use stdin rather than reading the input file")
    p.add_argument("--stdout", action="store_true", help="use stdout rather than writing to the output file")
    p.add_argument("--json", action="store_true", help="read JSON-encoded requests from stdin")
    p.add_argument("--no-format", action="store_true", help="skip the import normalizer")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p.set_defaults(func=cmd_gen)

    p = subparsers.add_parser("template", help="Manage templates")
    sub = p.add_subparsers(dest="template_command")

    sp = sub.add_parser("add", help="Install a template")
    sp.add_argument("file")
    sp.add_argument("--strict", action="store_true", help="also run the import normalizer on the sample")
    sp.set_defaults(func=cmd_template_add)

    sp = sub.add_parser("list", help="Show all installed templates")
    sp.set_defaults(func=cmd_template_list)

    sp = sub.add_parser("use", help="Use a template by default")
    sp.add_argument("name")
    sp.set_defaults(func=cmd_template_use)

    sp = sub.add_parser("remove", help="Remove a template")
    sp.add_argument("name")
    sp.set_defaults(func=cmd_template_remove)


def main(argv=None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="gostub",
        description="Generates test stubs for Go functions and methods.",
    )
    subparsers = parser.add_subparsers(dest="command")
    _build_parsers(subparsers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    if args.command == "template" and not getattr(args, "template_command", None):
        parser.parse_args(["template", "--help"])
        return 2

    try:
        return args.func(args)
    except GostubError as e:
        error("cli", str(e))
        return e.code


if __name__ == "__main__":
    sys.exit(main())
