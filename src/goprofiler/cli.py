"""Click CLI entry point with lazy-loaded subcommands."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click


# Lazy-loading command group: imports command modules only when invoked,
# so `--help` does not pay for loading the tree-sitter grammar.
_COMMANDS = {
    "analyze":  ("goprofiler.commands.cmd_analyze",  "analyze"),
    "check":    ("goprofiler.commands.cmd_check",    "check"),
    "patterns": ("goprofiler.commands.cmd_patterns", "patterns"),
}

_ALIASES = {
    "a": "analyze",
    "c": "check",
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        cmd_name = _ALIASES.get(cmd_name, cmd_name)
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)

    def resolve_command(self, ctx, args):
        # Report the canonical name for aliases (`a` -> `analyze`).
        _, cmd, rest = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, rest


@click.group(cls=LazyGroup)
@click.version_option(package_name="goprofiler")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('--debug', is_flag=True, help='Log engine decisions to stderr')
@click.pass_context
def cli(ctx, json_mode, debug):
    """GoProfiler: analyze and optimize Go code performance."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
