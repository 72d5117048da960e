import os

from click.testing import CliRunner

from kira_mnemonics.cli.main import kmcli
from kira_mnemonics.keymanager.master_keys import generate_key_set
from kira_mnemonics.keymanager.mnemonic_derivation import (
    derive_mnemonic,
    derive_priv_key_mnemonic,
)
from kira_mnemonics.keymanager.validator_keys import derive_validator_key
from tests.conftest import ABANDON_ART, BAD_CHECKSUM, WANT_VANISH


def test_derive_command():
    runner = CliRunner()
    result = runner.invoke(
        kmcli,
        ["derive", "--mnemonic", ABANDON_ART, "--name", "validator", "--type", "addr"],
    )
    assert result.exit_code == 0
    assert derive_mnemonic(ABANDON_ART, "validator", "addr") in result.output


def test_derive_command_invalid_mnemonic():
    runner = CliRunner()
    result = runner.invoke(
        kmcli,
        ["derive", "--mnemonic", BAD_CHECKSUM, "--name", "validator", "--type", "addr"],
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_priv_key_command():
    runner = CliRunner()
    result = runner.invoke(kmcli, ["priv-key", "--mnemonic", ABANDON_ART])
    assert result.exit_code == 0
    assert derive_priv_key_mnemonic(ABANDON_ART) in result.output


def test_master_command_writes_artifacts(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        kmcli,
        ["master", "--mnemonic", WANT_VANISH, "--masterkeys", str(tmp_path)],
    )
    assert result.exit_code == 0
    assert generate_key_set(WANT_VANISH).validator_node_id in result.output
    assert set(os.listdir(tmp_path)) == {
        "validator_node_key.json",
        "validator_node_id.key",
        "priv_validator_key.json",
        "mnemonics.env",
    }


def test_master_command_missing_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        kmcli,
        ["master", "--mnemonic", WANT_VANISH, "--masterkeys", str(tmp_path / "nope")],
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_valkey_command_node_id(tmp_path):
    keyid = tmp_path / "node_id.key"
    runner = CliRunner()
    result = runner.invoke(
        kmcli, ["valkey", "--mnemonic", WANT_VANISH, "--keyid", str(keyid)]
    )
    assert result.exit_code == 0
    assert keyid.read_text() == derive_validator_key(WANT_VANISH, "44'/118'/0'/0/0").node_id


def test_valkey_command_addresses():
    runner = CliRunner()
    result = runner.invoke(
        kmcli,
        ["valkey", "--mnemonic", WANT_VANISH, "--prefix", "kira", "--accadr", "--consadr"],
    )
    assert result.exit_code == 0
    assert "kira1" in result.output
    assert "kiravalcons1" in result.output
    assert "kiravaloper1" not in result.output


def test_version_command():
    runner = CliRunner()
    result = runner.invoke(kmcli, ["version"])
    assert result.exit_code == 0
    assert "kira-mnemonics" in result.output
