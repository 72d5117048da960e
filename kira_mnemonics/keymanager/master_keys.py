# kira_mnemonics/keymanager/master_keys.py

import os
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config.settings import KeygenConfig, settings
from .errors import KeyDerivationError, keygen_error_handler
from .key_backend import KeyBackend, default_backend
from .mnemonic_derivation import (
    SIGNER_ADDR,
    VALIDATOR_ADDR,
    VALIDATOR_NODE,
    VALIDATOR_VAL,
    derive_priv_key_mnemonic,
    derive_role_mnemonic,
)
from .validator_keys import write_private_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MnemonicSet:
    """Every child mnemonic derived from one master mnemonic, plus the node id."""

    validator_addr_mnemonic: str
    validator_val_mnemonic: str
    signer_addr_mnemonic: str
    validator_node_mnemonic: str
    validator_node_id: str
    priv_key_mnemonic: str

    def env_items(self, master_mnemonic: str) -> List[Tuple[str, str]]:
        """``KEY=VALUE`` pairs of the summary file, in file order."""
        return [
            ("MASTER_MNEMONIC", master_mnemonic),
            ("VALIDATOR_ADDR_MNEMONIC", self.validator_addr_mnemonic),
            ("VALIDATOR_NODE_MNEMONIC", self.validator_node_mnemonic),
            ("VALIDATOR_NODE_ID", self.validator_node_id),
            ("VALIDATOR_VAL_MNEMONIC", self.validator_val_mnemonic),
            ("SIGNER_ADDR_MNEMONIC", self.signer_addr_mnemonic),
        ]


def write_mnemonics_env(path: str, mnemonic_set: MnemonicSet, master_mnemonic: str):
    """
    Write the consolidated ``KEY=VALUE`` summary file.

    This is the only file holding the master mnemonic; treat its directory
    as sensitive. The file is written with mode 0600.

    Raises:
        ArtifactWriteError: If the file cannot be created or written.
    """
    data_to_write = "".join(
        f"{key}={value}\n" for key, value in mnemonic_set.env_items(master_mnemonic)
    )
    write_private_file(path, data_to_write)
    logger.info(f"Wrote mnemonics summary to {path}")


def generate_validator_node_key_json(
    validator_node_mnemonic: str,
    key_path: str,
    address_prefix: str,
    hd_path: str,
    backend: Optional[KeyBackend] = None,
):
    """
    Usage:
        generate_validator_node_key_json(mnemonic_set.validator_node_mnemonic,
                                         config_dir + "/node_key.json", "kira", "44'/118'/0'/0/0")
    """
    backend = backend or default_backend
    with keygen_error_handler("validator node key generation", KeyDerivationError):
        backend.write_key_artifact(
            validator_node_mnemonic, address_prefix, hd_path, node_key_path=key_path
        )


def generate_validator_node_id_file(
    validator_node_mnemonic: str,
    key_path: str,
    address_prefix: str,
    hd_path: str,
    backend: Optional[KeyBackend] = None,
):
    backend = backend or default_backend
    with keygen_error_handler("validator node id generation", KeyDerivationError):
        backend.write_key_artifact(
            validator_node_mnemonic, address_prefix, hd_path, node_id_path=key_path
        )


def generate_priv_validator_key_json(
    validator_val_mnemonic: str,
    key_path: str,
    address_prefix: str,
    hd_path: str,
    backend: Optional[KeyBackend] = None,
):
    """
    Usage:
        generate_priv_validator_key_json(mnemonic_set.validator_val_mnemonic,
                                         config_dir + "/priv_validator_key.json", "kira", "44'/118'/0'/0/0")
    """
    backend = backend or default_backend
    with keygen_error_handler("priv validator key generation", KeyDerivationError):
        backend.write_key_artifact(
            validator_val_mnemonic,
            address_prefix,
            hd_path,
            priv_validator_key_path=key_path,
        )


class MasterKeyGenerator:
    """
    Generates the full validator key set from a master mnemonic.

    Roles are derived in a fixed order and every step fails fast: the first
    error propagates and no partial MnemonicSet is returned.
    """

    def __init__(
        self,
        config: Optional[KeygenConfig] = None,
        backend: Optional[KeyBackend] = None,
    ):
        """
        Args:
            config: Defaults for prefix, HD path and artifact file names
            backend: Cryptographic/filesystem collaborators
        """
        self.config = config or KeygenConfig()
        self.backend = backend or default_backend

    def generate_key_set(
        self,
        master_mnemonic: str,
        address_prefix: Optional[str] = None,
        hd_path: Optional[str] = None,
        output_dir: str = "",
    ) -> MnemonicSet:
        """
        Derive every role mnemonic and, when ``output_dir`` is given, write
        the validator artifacts there.

        Args:
            master_mnemonic: Master BIP39 phrase
            address_prefix: Bech32 prefix (config default when empty)
            hd_path: HD derivation path (config default when empty)
            output_dir: Existing directory for artifacts, or "" to skip writing

        Returns:
            The derived MnemonicSet

        Raises:
            InvalidMnemonicError, InvalidPathError, EncodingError,
            KeyDerivationError, ArtifactWriteError
        """
        address_prefix = address_prefix or self.config.address_prefix
        hd_path = hd_path or self.config.hd_path

        self.backend.validate_mnemonic(master_mnemonic)
        self.backend.validate_path([output_dir])

        # VALIDATOR_NODE_MNEMONIC
        validator_node_mnemonic = derive_role_mnemonic(
            master_mnemonic, VALIDATOR_NODE, backend=self.backend
        )
        # VALIDATOR_NODE_ID
        validator_node_id = self.backend.derive_node_identity(
            validator_node_mnemonic.encode("utf-8")
        )
        # VALIDATOR_ADDR_MNEMONIC
        validator_addr_mnemonic = derive_role_mnemonic(
            master_mnemonic, VALIDATOR_ADDR, backend=self.backend
        )
        # VALIDATOR_VAL_MNEMONIC
        validator_val_mnemonic = derive_role_mnemonic(
            master_mnemonic, VALIDATOR_VAL, backend=self.backend
        )
        # SIGNER_ADDR_MNEMONIC
        signer_addr_mnemonic = derive_role_mnemonic(
            master_mnemonic, SIGNER_ADDR, backend=self.backend
        )
        priv_key_mnemonic = derive_priv_key_mnemonic(
            master_mnemonic, backend=self.backend
        )

        mnemonic_set = MnemonicSet(
            validator_addr_mnemonic=validator_addr_mnemonic,
            validator_val_mnemonic=validator_val_mnemonic,
            signer_addr_mnemonic=signer_addr_mnemonic,
            validator_node_mnemonic=validator_node_mnemonic,
            validator_node_id=validator_node_id,
            priv_key_mnemonic=priv_key_mnemonic,
        )
        logger.info(f"Derived master key set, validator node id {validator_node_id}")

        if output_dir:
            self.emit_artifacts(
                mnemonic_set, master_mnemonic, address_prefix, hd_path, output_dir
            )
        return mnemonic_set

    def emit_artifacts(
        self,
        mnemonic_set: MnemonicSet,
        master_mnemonic: str,
        address_prefix: str,
        hd_path: str,
        output_dir: str,
    ):
        """
        Write, in order: validator node key, validator node id, priv validator
        key and the mnemonics summary. Stops at the first failure; files
        already written are left in place.
        """
        generate_validator_node_key_json(
            mnemonic_set.validator_node_mnemonic,
            os.path.join(output_dir, self.config.validator_node_key_file_name),
            address_prefix,
            hd_path,
            backend=self.backend,
        )
        generate_validator_node_id_file(
            mnemonic_set.validator_node_mnemonic,
            os.path.join(output_dir, self.config.validator_node_id_file_name),
            address_prefix,
            hd_path,
            backend=self.backend,
        )
        generate_priv_validator_key_json(
            mnemonic_set.validator_val_mnemonic,
            os.path.join(output_dir, self.config.priv_validator_key_file_name),
            address_prefix,
            hd_path,
            backend=self.backend,
        )
        write_mnemonics_env(
            os.path.join(output_dir, self.config.mnemonics_env_file_name),
            mnemonic_set,
            master_mnemonic,
        )


def generate_key_set(
    master_mnemonic: str,
    address_prefix: Optional[str] = None,
    hd_path: Optional[str] = None,
    output_dir: str = "",
) -> MnemonicSet:
    """
    Shortcut for ``MasterKeyGenerator(...).generate_key_set(...)`` configured
    from the ``KIRA_MNEMONICS_*`` settings.
    """
    config = KeygenConfig.from_settings(settings)
    return MasterKeyGenerator(config=config).generate_key_set(
        master_mnemonic, address_prefix, hd_path, output_dir
    )
