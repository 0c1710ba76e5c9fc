"""CLI entry point for stylekit.

Defines the main CLI group using a lazy-loading group so ``--help``
stays fast: command modules are imported only when invoked.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from stylekit_cli import __version__
from stylekit_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted names of registered and lazy commands."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing its module on first use."""
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "compile": "stylekit_cli.commands.compile.compile_cmd",
    "plan": "stylekit_cli.commands.plan.plan",
    "stamp": "stylekit_cli.commands.stamp.stamp",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="stylekit")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
def cli() -> None:
    """stylekit - Sass build orchestration.

    Compile the stylesheets affected by a changed file, with optional
    Autoprefixer post-processing.

    **Commands:**

    - `stylekit compile FILE` - Compile what FILE requires
    - `stylekit plan FILE` - Show which files would be compiled, and where to
    - `stylekit stamp FILE` - Add or remove asset version stamps
    """
    pass


if __name__ == "__main__":
    cli()
