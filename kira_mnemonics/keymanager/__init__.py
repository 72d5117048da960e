from .errors import (
    MnemonicGeneratorError,
    InvalidMnemonicError,
    InvalidPathError,
    EncodingError,
    ArtifactWriteError,
    KeyDerivationError,
)
from .key_backend import KeyBackend
from .mnemonic_derivation import (
    RoleLabel,
    derive_entropy,
    derive_mnemonic,
    derive_priv_key_mnemonic,
)
from .master_keys import MasterKeyGenerator, MnemonicSet, generate_key_set

__all__ = [
    "MnemonicGeneratorError",
    "InvalidMnemonicError",
    "InvalidPathError",
    "EncodingError",
    "ArtifactWriteError",
    "KeyDerivationError",
    "KeyBackend",
    "RoleLabel",
    "derive_entropy",
    "derive_mnemonic",
    "derive_priv_key_mnemonic",
    "MasterKeyGenerator",
    "MnemonicSet",
    "generate_key_set",
]
