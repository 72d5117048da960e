# kira_mnemonics/keymanager/validator_keys.py

import os
import json
import base64
import hashlib
import logging
from dataclasses import dataclass
from typing import Dict

import nacl.signing
from bip_utils import (
    AtomAddrEncoder,
    Bech32Encoder,
    Bip32Slip10Secp256k1,
    Bip39SeedGenerator,
)

from .errors import ArtifactWriteError, KeyDerivationError, keygen_error_handler

logger = logging.getLogger(__name__)

PUB_KEY_TYPE = "tendermint/PubKeyEd25519"
PRIV_KEY_TYPE = "tendermint/PrivKeyEd25519"

# Tendermint addresses and peer ids are the truncated SHA-256 of the public key
ADDRESS_SIZE = 20


def normalize_hd_path(hd_path: str) -> str:
    """Return ``hd_path`` as an absolute BIP32 path (``m/...``)."""
    path = hd_path.strip()
    if path == "m" or path.startswith("m/"):
        return path
    return f"m/{path.lstrip('/')}"


def ed25519_address(public_key: bytes) -> bytes:
    return hashlib.sha256(public_key).digest()[:ADDRESS_SIZE]


def node_id_from_public_key(public_key: bytes) -> str:
    """Peer id of a node: lowercase hex of its ed25519 address."""
    return ed25519_address(public_key).hex()


def signing_key_from_secret(secret: bytes) -> nacl.signing.SigningKey:
    """
    Seed an ed25519 key from arbitrary secret bytes.

    The secret is hashed with SHA-256 and the digest used as the 32-byte
    ed25519 seed, matching Tendermint's ``GenPrivKeyFromSecret``.
    """
    return nacl.signing.SigningKey(hashlib.sha256(secret).digest())


def node_id_from_secret(secret: bytes) -> str:
    signing_key = signing_key_from_secret(secret)
    return node_id_from_public_key(bytes(signing_key.verify_key))


@dataclass(frozen=True)
class ValidatorKey:
    """ed25519 validator key material derived from a mnemonic."""

    private_key: bytes  # 64 bytes: seed || public key
    public_key: bytes
    account_private_key: bytes  # secp256k1 key at the HD path
    account_public_key: bytes  # compressed secp256k1 public key

    @property
    def address(self) -> str:
        return ed25519_address(self.public_key).hex().upper()

    @property
    def node_id(self) -> str:
        return node_id_from_public_key(self.public_key)

    def priv_validator_key_json(self) -> Dict:
        return {
            "address": self.address,
            "pub_key": {
                "type": PUB_KEY_TYPE,
                "value": base64.b64encode(self.public_key).decode("ascii"),
            },
            "priv_key": {
                "type": PRIV_KEY_TYPE,
                "value": base64.b64encode(self.private_key).decode("ascii"),
            },
        }

    def node_key_json(self) -> Dict:
        return {
            "priv_key": {
                "type": PRIV_KEY_TYPE,
                "value": base64.b64encode(self.private_key).decode("ascii"),
            }
        }


def derive_validator_key(mnemonic: str, hd_path: str) -> ValidatorKey:
    """
    Derive validator key material from a mnemonic.

    Steps:
      1. ed25519 node/signing key seeded from the mnemonic bytes, so the peer
         id matches the one recorded for the mnemonic in a key set.
      2. BIP39 seed from the mnemonic (empty passphrase).
      3. BIP32 secp256k1 derivation along ``hd_path`` for the account key
         behind the bech32 addresses.

    Args:
        mnemonic (str): BIP39 mnemonic phrase.
        hd_path (str): Derivation path, e.g. ``44'/118'/0'/0/0``.

    Raises:
        KeyDerivationError: If the mnemonic or the path is rejected.
    """
    with keygen_error_handler("validator key derivation", KeyDerivationError):
        seed = Bip39SeedGenerator(mnemonic).Generate()
        bip32_ctx = Bip32Slip10Secp256k1.FromSeed(seed).DerivePath(
            normalize_hd_path(hd_path)
        )
        account_private_key = bip32_ctx.PrivateKey().Raw().ToBytes()
        account_public_key = bip32_ctx.PublicKey().RawCompressed().ToBytes()

    signing_key = signing_key_from_secret(mnemonic.encode("utf-8"))
    public_key = bytes(signing_key.verify_key)
    return ValidatorKey(
        private_key=bytes(signing_key) + public_key,
        public_key=public_key,
        account_private_key=account_private_key,
        account_public_key=account_public_key,
    )


def key_addresses(mnemonic: str, address_prefix: str, hd_path: str) -> Dict[str, str]:
    """
    Bech32 addresses for a mnemonic: account (``<prefix>``), validator
    operator (``<prefix>valoper``) and consensus (``<prefix>valcons``).
    """
    key = derive_validator_key(mnemonic, hd_path)
    with keygen_error_handler("address encoding", KeyDerivationError):
        return {
            "account": AtomAddrEncoder.EncodeKey(
                key.account_public_key, hrp=address_prefix
            ),
            "validator": AtomAddrEncoder.EncodeKey(
                key.account_public_key, hrp=f"{address_prefix}valoper"
            ),
            "consensus": Bech32Encoder.Encode(
                f"{address_prefix}valcons", ed25519_address(key.public_key)
            ),
        }


def write_private_file(path: str, content: str):
    """
    Write ``content`` to ``path`` readable by the owner only (mode 0600).

    The file is created with restricted permissions rather than chmod-ed
    after the write; an existing file is truncated and restricted too.

    Raises:
        ArtifactWriteError: If the file cannot be created or written.
    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.fchmod(f.fileno(), 0o600)
            f.write(content)
    except OSError as e:
        logger.error(f"Error creating {path} file: {e}")
        raise ArtifactWriteError(f"Error creating {path} file: {e}") from e


def write_key_artifact(
    mnemonic: str,
    address_prefix: str,
    hd_path: str,
    priv_validator_key_path: str = "",
    node_key_path: str = "",
    node_id_path: str = "",
) -> ValidatorKey:
    """
    Write validator key files for a mnemonic.

    Only the outputs whose path is non-empty are produced:
      - ``priv_validator_key_path``: signing key JSON (address, pub_key, priv_key)
      - ``node_key_path``: node key JSON (priv_key only)
      - ``node_id_path``: bare peer id string

    Returns:
        ValidatorKey: The derived key material.

    Raises:
        KeyDerivationError: If key material cannot be derived.
        ArtifactWriteError: If a file cannot be written.
    """
    key = derive_validator_key(mnemonic, hd_path)
    logger.debug(f"Derived validator key for prefix '{address_prefix}' at {hd_path}")

    if priv_validator_key_path:
        write_private_file(
            priv_validator_key_path, json.dumps(key.priv_validator_key_json(), indent=2)
        )
        logger.info(f"Wrote priv validator key to {priv_validator_key_path}")
    if node_key_path:
        write_private_file(node_key_path, json.dumps(key.node_key_json(), indent=2))
        logger.info(f"Wrote node key to {node_key_path}")
    if node_id_path:
        write_private_file(node_id_path, key.node_id)
        logger.info(f"Wrote node id {key.node_id} to {node_id_path}")

    return key
