import hashlib
import logging

import pytest

from kira_mnemonics.keymanager.errors import EncodingError, InvalidMnemonicError
from kira_mnemonics.keymanager.key_backend import KeyBackend
from kira_mnemonics.keymanager.mnemonic_derivation import (
    PRIV_KEY,
    SIGNER_ADDR,
    VALIDATOR_ADDR,
    VALIDATOR_NODE,
    VALIDATOR_VAL,
    RoleLabel,
    derive_entropy,
    derive_mnemonic,
    derive_priv_key_mnemonic,
    derive_role_mnemonic,
)
from tests.conftest import ABANDON_ART, BAD_CHECKSUM, WANT_VANISH, FakeBackend

ALL_ROLES = [VALIDATOR_NODE, VALIDATOR_ADDR, VALIDATOR_VAL, SIGNER_ADDR, PRIV_KEY]

# -------------------------------------------------------------------
# TEST derive_entropy
# -------------------------------------------------------------------


def test_entropy_matches_canonical_string(master_mnemonic):
    expected = hashlib.sha256(
        ("abandon" * 23 + "art;validatornode").encode("utf-8")
    ).digest()
    assert derive_entropy(master_mnemonic, "validator", "node") == expected


def test_entropy_is_32_bytes(master_mnemonic):
    for role in ALL_ROLES:
        assert len(derive_entropy(master_mnemonic, role.name, role.type)) == 32


def test_entropy_is_deterministic(master_mnemonic):
    first = derive_entropy(master_mnemonic, "validator", "node")
    second = derive_entropy(master_mnemonic, "validator", "node")
    assert first == second


def test_entropy_differs_per_role(master_mnemonic):
    values = {derive_entropy(master_mnemonic, r.name, r.type) for r in ALL_ROLES}
    assert len(values) == len(ALL_ROLES)


def test_entropy_differs_per_master():
    assert derive_entropy(ABANDON_ART, "validator", "node") != derive_entropy(
        WANT_VANISH, "validator", "node"
    )


@pytest.mark.parametrize(
    "variant",
    [
        "  " + ABANDON_ART + "  ",
        ABANDON_ART.replace(" ", "   "),
        ABANDON_ART.replace(" ", "\t"),
        ABANDON_ART.replace(" ", "\n"),
    ],
)
def test_entropy_ignores_whitespace(master_mnemonic, variant):
    assert derive_entropy(variant, "validator", "node") == derive_entropy(
        master_mnemonic, "validator", "node"
    )


def test_entropy_ignores_case(master_mnemonic):
    assert derive_entropy(master_mnemonic.upper(), "Validator", "NODE") == derive_entropy(
        master_mnemonic, "validator", "node"
    )


def test_entropy_accepts_custom_roles(master_mnemonic):
    custom = derive_entropy(master_mnemonic, "sentry", "node")
    assert custom not in {
        derive_entropy(master_mnemonic, r.name, r.type) for r in ALL_ROLES
    }


# -------------------------------------------------------------------
# TEST derive_mnemonic
# -------------------------------------------------------------------


def test_derive_mnemonic_round_trip(master_mnemonic):
    first = derive_mnemonic(master_mnemonic, "validator", "node")
    second = derive_mnemonic(master_mnemonic, "validator", "node")
    assert first == second
    assert len(first.split()) == 24
    assert first != master_mnemonic


def test_derived_mnemonic_is_valid_bip39(master_mnemonic):
    backend = KeyBackend()
    for role in ALL_ROLES:
        backend.validate_mnemonic(derive_role_mnemonic(master_mnemonic, role))


def test_derive_mnemonic_encodes_entropy(master_mnemonic):
    backend = FakeBackend()
    child = derive_mnemonic(master_mnemonic, "signer", "addr", backend=backend)
    assert child == derive_entropy(master_mnemonic, "signer", "addr").hex()
    assert backend.names() == ["encode_mnemonic"]


def test_derive_mnemonic_surfaces_encoding_error(master_mnemonic):
    backend = FakeBackend(fail_on={"encode_mnemonic": EncodingError("boom")})
    with pytest.raises(EncodingError):
        derive_mnemonic(master_mnemonic, "validator", "addr", backend=backend)


def test_role_label_str():
    assert str(RoleLabel("validator", "addr")) == "validator-addr"


def test_derive_mnemonic_logs_role_label(master_mnemonic, fake_backend, caplog):
    caplog.set_level(logging.DEBUG, logger="kira_mnemonics.keymanager.mnemonic_derivation")
    derive_role_mnemonic(master_mnemonic, SIGNER_ADDR, backend=fake_backend)
    assert "role 'signer-addr'" in caplog.text


# -------------------------------------------------------------------
# TEST derive_priv_key_mnemonic
# -------------------------------------------------------------------


def test_priv_key_mnemonic_uses_priv_key_role(master_mnemonic):
    assert derive_priv_key_mnemonic(master_mnemonic) == derive_mnemonic(
        master_mnemonic, "priv", "key"
    )


def test_priv_key_mnemonic_rejects_invalid_master():
    with pytest.raises(InvalidMnemonicError):
        derive_priv_key_mnemonic(BAD_CHECKSUM)
