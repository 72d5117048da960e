"""
Test configuration and fixtures for kira-mnemonics tests
"""

import pytest

from kira_mnemonics.keymanager.errors import InvalidMnemonicError
from kira_mnemonics.keymanager.key_backend import KeyBackend

# Well-known BIP39 test vector: 32 zero bytes of entropy (for testing only)
ABANDON_ART = " ".join(["abandon"] * 23 + ["art"])

# Valid 24-word phrase used in the CLI usage notes
WANT_VANISH = (
    "want vanish frown filter resemble purchase trial baby equal never cinnamon "
    "claim wrap cash snake cable head tray few daring shine clip loyal series"
)

# Right words, wrong checksum
BAD_CHECKSUM = " ".join(["abandon"] * 24)


class FakeBackend:
    """
    Deterministic stand-in for KeyBackend that records every call.

    Mnemonics are the hex of their entropy, node ids are derived from the
    seed length and artifact writes create marker files.
    """

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on or {}

    def _maybe_fail(self, step):
        if step in self.fail_on:
            raise self.fail_on[step]

    def validate_mnemonic(self, mnemonic):
        self.calls.append(("validate_mnemonic", mnemonic))
        if mnemonic == BAD_CHECKSUM:
            raise InvalidMnemonicError("invalid checksum")

    def validate_path(self, paths):
        self.calls.append(("validate_path", list(paths)))
        KeyBackend().validate_path(paths)

    def encode_mnemonic(self, entropy):
        self.calls.append(("encode_mnemonic", entropy))
        self._maybe_fail("encode_mnemonic")
        return entropy.hex()

    def derive_node_identity(self, seed):
        self.calls.append(("derive_node_identity", seed))
        self._maybe_fail("derive_node_identity")
        return f"node-{len(seed)}"

    def write_key_artifact(
        self,
        mnemonic,
        address_prefix,
        hd_path,
        priv_validator_key_path="",
        node_key_path="",
        node_id_path="",
    ):
        self.calls.append(
            (
                "write_key_artifact",
                mnemonic,
                address_prefix,
                hd_path,
                priv_validator_key_path,
                node_key_path,
                node_id_path,
            )
        )
        for step, path in (
            ("priv_validator_key", priv_validator_key_path),
            ("node_key", node_key_path),
            ("node_id", node_id_path),
        ):
            if path:
                self._maybe_fail(step)
                with open(path, "w") as f:
                    f.write(f"{step}:{mnemonic}")

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def master_mnemonic():
    return ABANDON_ART


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def output_dir(tmp_path):
    """
    Empty directory for artifacts, separate per test.
    """
    path = tmp_path / "masterkeys"
    path.mkdir()
    return path
