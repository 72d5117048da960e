# kira_mnemonics/cli/main.py

#!/usr/bin/env python3

import click
from rich.console import Console
from rich.panel import Panel
from rich import box

from .. import __version__
from .mnemonic_cli import derive_cmd, master_cmd, priv_key_cmd, valkey_cmd

BANNER = r"""
 _  _____ ____      _      __  __ _   _ _____ __  __  ___  _   _ ___ ____ ____
| |/ /_ _|  _ \    / \    |  \/  | \ | | ____|  \/  |/ _ \| \ | |_ _/ ___/ ___|
| ' / | || |_) |  / _ \   | |\/| |  \| |  _| | |\/| | | | |  \| || | |   \___ \
| . \ | ||  _ <  / ___ \  | |  | | |\  | |___| |  | | |_| | |\  || | |___ ___) |
|_|\_\___|_| \_\/_/   \_\ |_|  |_|_| \_|_____|_|  |_|\___/|_| \_|___\____|____/
"""


@click.group(invoke_without_command=True)
@click.pass_context
def kmcli(ctx):
    """
    🔑 KIRA MNEMONICS CLI - Deterministic validator keys from one master mnemonic
    """
    if ctx.invoked_subcommand is None:
        console = Console()
        console.print(BANNER, style="bold bright_cyan")
        console.print(
            Panel(
                "[bright_green]AVAILABLE COMMANDS:[/]\n"
                "  • [bright_yellow]derive[/]     Derive one child mnemonic (--name/--type)\n"
                "  • [bright_yellow]priv-key[/]   Derive the priv-key mnemonic\n"
                "  • [bright_yellow]master[/]     Generate the full validator key set\n"
                "  • [bright_yellow]valkey[/]     Write validator key files for one mnemonic\n"
                "  • [bright_yellow]version[/]    Show version information\n\n"
                "[bright_cyan]Usage: [bright_white]kmcli [COMMAND] --help[/]",
                title="[bold bright_magenta]KIRA MNEMONICS[/]",
                border_style="bright_magenta",
                box=box.DOUBLE_EDGE,
                padding=(1, 2),
            )
        )


kmcli.add_command(derive_cmd)
kmcli.add_command(priv_key_cmd)
kmcli.add_command(master_cmd)
kmcli.add_command(valkey_cmd)


@kmcli.command()
def version():
    """Show version information"""
    click.echo(f"kira-mnemonics {__version__}")


def main():
    kmcli()


if __name__ == "__main__":
    main()
