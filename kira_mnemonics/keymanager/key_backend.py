# kira_mnemonics/keymanager/key_backend.py

import os
import logging
from typing import Iterable

from bip_utils import Bip39Languages, Bip39MnemonicEncoder, Bip39MnemonicValidator

from .errors import (
    EncodingError,
    InvalidMnemonicError,
    InvalidPathError,
    KeyDerivationError,
    keygen_error_handler,
)
from .validator_keys import ValidatorKey, node_id_from_secret, write_key_artifact

logger = logging.getLogger(__name__)


class KeyBackend:
    """
    Cryptographic and filesystem collaborators used by the key-set generator.

    The generator only sequences calls; everything that touches BIP39,
    ed25519 or the disk goes through an instance of this class, so tests can
    hand in a fake with the same methods.
    """

    def __init__(self, language: Bip39Languages = Bip39Languages.ENGLISH):
        self.language = language

    def validate_mnemonic(self, mnemonic: str):
        """Raise InvalidMnemonicError unless ``mnemonic`` is a valid BIP39 phrase."""
        with keygen_error_handler("mnemonic validation", InvalidMnemonicError):
            Bip39MnemonicValidator(self.language).Validate(mnemonic)

    def validate_path(self, paths: Iterable[str]):
        """Raise InvalidPathError for any non-empty path that is not a directory."""
        for path in paths:
            if not path:
                continue
            if not os.path.exists(path):
                raise InvalidPathError(f"Path '{path}' does not exist")
            if not os.path.isdir(path):
                raise InvalidPathError(f"Path '{path}' is not a directory")

    def encode_mnemonic(self, entropy: bytes) -> str:
        with keygen_error_handler("mnemonic encoding", EncodingError):
            return str(Bip39MnemonicEncoder(self.language).Encode(entropy))

    def derive_node_identity(self, seed: bytes) -> str:
        with keygen_error_handler("node id derivation", KeyDerivationError):
            return node_id_from_secret(seed)

    def write_key_artifact(
        self,
        mnemonic: str,
        address_prefix: str,
        hd_path: str,
        priv_validator_key_path: str = "",
        node_key_path: str = "",
        node_id_path: str = "",
    ) -> ValidatorKey:
        return write_key_artifact(
            mnemonic,
            address_prefix,
            hd_path,
            priv_validator_key_path=priv_validator_key_path,
            node_key_path=node_key_path,
            node_id_path=node_id_path,
        )


default_backend = KeyBackend()
