# file: kira_mnemonics/cli/mnemonic_cli.py
"""
Command-line interface for master-mnemonic key generation.

Derives child mnemonics from a master mnemonic, generates the full validator
key set and writes validator key files.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from ..config.settings import KeygenConfig, settings, logger
from ..keymanager.errors import MnemonicGeneratorError
from ..keymanager.key_backend import default_backend
from ..keymanager.master_keys import MasterKeyGenerator
from ..keymanager.mnemonic_derivation import derive_mnemonic, derive_priv_key_mnemonic
from ..keymanager.validator_keys import key_addresses

console = Console()

mnemonic_option = click.option(
    "--mnemonic",
    prompt="Enter the mnemonic phrase",
    hide_input=True,
    help="BIP39 mnemonic phrase.",
)
prefix_option = click.option(
    "--prefix",
    default=lambda: settings.DEFAULT_PREFIX,
    show_default=True,
    help="Bech32 address prefix.",
)
path_option = click.option(
    "--path",
    "hd_path",
    default=lambda: settings.DEFAULT_PATH,
    show_default=True,
    help="HD derivation path.",
)


def _fail(e: Exception):
    console.print(f"[bold red]Error:[/bold red] {e}")
    sys.exit(1)


@click.command("derive")
@mnemonic_option
@click.option("--name", required=True, help="Role name, e.g. 'validator'.")
@click.option(
    "--type", "type_of_mnemonic", required=True, help="Role type, e.g. 'addr'."
)
def derive_cmd(mnemonic, name, type_of_mnemonic):
    """
    🔑 Derive one child mnemonic from a master mnemonic.

    Example: kmcli derive --name validator --type addr
    """
    try:
        default_backend.validate_mnemonic(mnemonic)
        child = derive_mnemonic(mnemonic, name, type_of_mnemonic)
    except MnemonicGeneratorError as e:
        _fail(e)
    click.echo(child)


@click.command("priv-key")
@mnemonic_option
def priv_key_cmd(mnemonic):
    """🔐 Derive the priv-key mnemonic from a master mnemonic."""
    try:
        child = derive_priv_key_mnemonic(mnemonic)
    except MnemonicGeneratorError as e:
        _fail(e)
    click.echo(child)


@click.command("master")
@mnemonic_option
@click.option(
    "--masterkeys",
    default="",
    help="Existing directory to write validator key files and mnemonics.env into.",
)
@prefix_option
@path_option
@click.option(
    "--show",
    is_flag=True,
    default=False,
    help="Display the derived mnemonics (sensitive information).",
)
def master_cmd(mnemonic, masterkeys, prefix, hd_path, show):
    """
    🏦 Generate the full validator key set from a master mnemonic.
    """
    generator = MasterKeyGenerator(config=KeygenConfig.from_settings(settings))
    try:
        mnemonic_set = generator.generate_key_set(
            mnemonic, address_prefix=prefix, hd_path=hd_path, output_dir=masterkeys
        )
    except MnemonicGeneratorError as e:
        logger.debug(f"Master key generation failed: {e}")
        _fail(e)

    console.print(
        f":white_check_mark: [bold green]Success![/bold green] Validator node id: [cyan]{mnemonic_set.validator_node_id}[/cyan]"
    )
    if masterkeys:
        console.print("📁 Key files stored in the following location:")
        console.print(f"  [dim]{masterkeys}[/dim]")
        console.print(
            "[bold yellow]⚠️ mnemonics.env contains the master mnemonic. Keep this directory private.[/bold yellow]"
        )

    if show:
        table = Table(title="Derived mnemonics")
        table.add_column("Role", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("VALIDATOR_ADDR_MNEMONIC", mnemonic_set.validator_addr_mnemonic)
        table.add_row("VALIDATOR_NODE_MNEMONIC", mnemonic_set.validator_node_mnemonic)
        table.add_row("VALIDATOR_NODE_ID", mnemonic_set.validator_node_id)
        table.add_row("VALIDATOR_VAL_MNEMONIC", mnemonic_set.validator_val_mnemonic)
        table.add_row("SIGNER_ADDR_MNEMONIC", mnemonic_set.signer_addr_mnemonic)
        table.add_row("PRIV_KEY_MNEMONIC", mnemonic_set.priv_key_mnemonic)
        console.print(table)


@click.command("valkey")
@mnemonic_option
@prefix_option
@path_option
@click.option("--valkey", default="", help="Output path for priv_validator_key.json.")
@click.option("--nodekey", default="", help="Output path for node_key.json.")
@click.option("--keyid", default="", help="Output path for the node id file.")
@click.option("--accadr", is_flag=True, default=False, help="Print the account address.")
@click.option("--valadr", is_flag=True, default=False, help="Print the validator address.")
@click.option("--consadr", is_flag=True, default=False, help="Print the consensus address.")
def valkey_cmd(mnemonic, prefix, hd_path, valkey, nodekey, keyid, accadr, valadr, consadr):
    """
    🗝️ Write validator key files for a single mnemonic.
    """
    try:
        default_backend.validate_mnemonic(mnemonic)
        key = default_backend.write_key_artifact(
            mnemonic,
            prefix,
            hd_path,
            priv_validator_key_path=valkey,
            node_key_path=nodekey,
            node_id_path=keyid,
        )
        addresses = (
            key_addresses(mnemonic, prefix, hd_path)
            if accadr or valadr or consadr
            else {}
        )
    except MnemonicGeneratorError as e:
        _fail(e)

    if accadr:
        click.echo(addresses["account"])
    if valadr:
        click.echo(addresses["validator"])
    if consadr:
        click.echo(addresses["consensus"])
    if not (valkey or nodekey or keyid or accadr or valadr or consadr):
        click.echo(key.node_id)
