# kira_mnemonics/keymanager/mnemonic_derivation.py

import re
import hashlib
import logging
from typing import NamedTuple, Optional

from .key_backend import KeyBackend, default_backend

logger = logging.getLogger(__name__)

WHITESPACE_REGEX = re.compile(r"\s+")


class RoleLabel(NamedTuple):
    """``(name, type)`` pair selecting which child mnemonic is derived."""

    name: str
    type: str

    def __str__(self):
        return f"{self.name}-{self.type}"


VALIDATOR_NODE = RoleLabel("validator", "node")
VALIDATOR_ADDR = RoleLabel("validator", "addr")
VALIDATOR_VAL = RoleLabel("validator", "val")
SIGNER_ADDR = RoleLabel("signer", "addr")
PRIV_KEY = RoleLabel("priv", "key")


def derive_entropy(master_mnemonic: str, name: str, type_of_mnemonic: str) -> bytes:
    """
    Derive 32 bytes of entropy for one role from the master mnemonic.

    The input string ``"<master> ; <name> <type>"`` is lower-cased and
    stripped of all whitespace before hashing with SHA-256, so word
    separators in the master mnemonic do not influence the result.

    Args:
        master_mnemonic (str): The master BIP39 phrase.
        name (str): Role name, e.g. ``validator``.
        type_of_mnemonic (str): Role type, e.g. ``addr``.

    Returns:
        bytes: The raw SHA-256 digest.
    """
    string_to_hash = f"{master_mnemonic} ; {name} {type_of_mnemonic}".lower()
    string_to_hash = WHITESPACE_REGEX.sub("", string_to_hash)
    return hashlib.sha256(string_to_hash.encode("utf-8")).digest()


def derive_mnemonic(
    master_mnemonic: str,
    name: str,
    type_of_mnemonic: str,
    backend: Optional[KeyBackend] = None,
) -> str:
    """
    Derive the child mnemonic for role ``(name, type_of_mnemonic)``.

    Raises:
        EncodingError: If the backend cannot encode the entropy.
    """
    backend = backend or default_backend
    entropy = derive_entropy(master_mnemonic, name, type_of_mnemonic)
    mnemonic = backend.encode_mnemonic(entropy)
    logger.debug(f"Derived child mnemonic for role '{RoleLabel(name, type_of_mnemonic)}'")
    return mnemonic


def derive_role_mnemonic(
    master_mnemonic: str, role: RoleLabel, backend: Optional[KeyBackend] = None
) -> str:
    return derive_mnemonic(master_mnemonic, role.name, role.type, backend=backend)


def derive_priv_key_mnemonic(
    master_mnemonic: str, backend: Optional[KeyBackend] = None
) -> str:
    """
    Derive the priv-key mnemonic (role ``priv key``) from a master mnemonic.

    The master mnemonic is validated first, since this is callable on its own.

    Raises:
        InvalidMnemonicError: If the master mnemonic is not valid BIP39.
        EncodingError: If the backend cannot encode the entropy.
    """
    backend = backend or default_backend
    backend.validate_mnemonic(master_mnemonic)
    return derive_role_mnemonic(master_mnemonic, PRIV_KEY, backend=backend)
