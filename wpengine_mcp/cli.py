"""
wpengine-mcp: MCP server and command line for the WP Engine hosting API
"""

import argparse
import json
import sys

from wpengine_mcp import config
from wpengine_mcp.api import _mask_token, _safe_json_parse
from wpengine_mcp.catalog import export
from wpengine_mcp.chat import HELP_TEXT as CHAT_HELP_TEXT
from wpengine_mcp.chat import parse_message
from wpengine_mcp.client import WPEngineClient
from wpengine_mcp.exceptions import CliError
from wpengine_mcp.invocation import invoke
from wpengine_mcp.schemas import build_registry

HELP_TEXT = """\
Usage: wpengine-mcp <command> [args...]

Global flags:
  --verbose, -v           Log HTTP requests/responses to stderr
  --version               Show version number

Commands:
  serve                   - Run the MCP server over stdio
  tools                   - Print the tool catalog (names + input schemas)
    --names                 Print tool names only
  call <tool> [json]      - Invoke one tool and print its result envelope
                            (e.g. call get_site '{"site_id": "..."}')
  chat "<message>"        - Run a plain-English command (e.g. "list sites")
  check                   - Validate configuration and call get_api_status
  version                 - Show version number

Configuration (.env or environment):
  WPENGINE_USERNAME / WPENGINE_PASSWORD   API credentials (Portal > API Access)
  WPENGINE_API_TOKEN                      Bearer token (alternative)
  WPENGINE_API_BASE_URL                   Default https://api.wpengineapi.com/v1
  WPENGINE_HTTP_TIMEOUT_SECONDS           Per-request timeout (default 30)
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so flags work after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (verbose, remaining_argv). Handles --version directly.
    """
    verbose = False
    remaining = []
    for arg in argv:
        if arg == "--version":
            print(f"wpengine-mcp {config.VERSION}")
            sys.exit(0)
        elif arg in ("--verbose", "-v"):
            verbose = True
        else:
            remaining.append(arg)
    return verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def build_parser():
    parser = _SubcommandParser(
        prog="wpengine-mcp",
        description="MCP server and command line for the WP Engine hosting API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("serve").set_defaults(func=cmd_serve)

    p = sub.add_parser("tools")
    p.add_argument("--names", action="store_true")
    p.set_defaults(func=cmd_tools)

    p = sub.add_parser("call")
    p.add_argument("tool")
    p.add_argument("json_args", nargs="?", default=None)
    p.set_defaults(func=cmd_call)

    p = sub.add_parser("chat")
    p.add_argument("message", nargs="+")
    p.set_defaults(func=cmd_chat)

    sub.add_parser("check").set_defaults(func=cmd_check)
    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

NO_CONFIG_COMMANDS = {"tools", "version"}


def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _run_invocation(name, arguments):
    envelope = invoke(name, arguments, registry=build_registry(), client=WPEngineClient())
    _print_json(envelope)
    if not envelope.get("success"):
        sys.exit(1)


def cmd_serve(ns):
    from wpengine_mcp.mcp_server import main as serve_main

    serve_main()


def cmd_tools(ns):
    tools = export(build_registry())
    if ns.names:
        for tool in tools:
            print(tool["name"])
        return
    _print_json(tools)


def cmd_call(ns):
    arguments = {}
    if ns.json_args:
        arguments = _safe_json_parse(ns.json_args, context="tool arguments")
        if not isinstance(arguments, dict):
            raise CliError("[ERROR] Tool arguments must be a JSON object.")
    _run_invocation(ns.tool, arguments)


def cmd_chat(ns):
    message = " ".join(ns.message)
    command = parse_message(message)
    if command is None:
        print(CHAT_HELP_TEXT)
        sys.exit(1)
    _run_invocation(command.operation.value, command.arguments)


def cmd_check(ns):
    scheme = config.auth_scheme()
    identity = config.USERNAME if scheme == config.AUTH_BASIC else config.API_TOKEN
    print(
        f"Config OK: base_url={config.BASE_URL} auth={scheme} "
        f"credential={_mask_token(identity)} timeout={config.HTTP_TIMEOUT_SECONDS}s",
        file=sys.stderr,
    )
    _run_invocation("get_api_status", {})


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _error_type_from_message(message):
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err):
    msg = str(err)
    payload = {
        "success": False,
        "error": {
            "type": _error_type_from_message(msg),
            "message": msg,
            "exit_code": getattr(err, "exit_code", 1),
        },
    }
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    verbose, remaining_argv = _extract_global_flags(argv)
    if verbose:
        config.HTTP_LOG_ENABLED = True

    if not remaining_argv:
        print(HELP_TEXT)
        sys.exit(0)

    try:
        parser = build_parser()
        ns = parser.parse_args(remaining_argv)

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        cmd = ns.command
        if cmd == "version":
            print(f"wpengine-mcp {config.VERSION}")
            sys.exit(0)

        config.configure_logging("INFO" if verbose else None)

        # Refuse to run backend commands on a bad configuration.
        if cmd not in NO_CONFIG_COMMANDS and cmd != "serve":
            config.check_config()

        handler = getattr(ns, "func", None)
        if handler:
            handler(ns)
        else:
            raise CliError(f"[ERROR] Unknown command: {cmd}")

    except CliError as e:
        _emit_cli_error(e)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
