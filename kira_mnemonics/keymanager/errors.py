#!/usr/bin/env python3
"""
Key Generation Error Handling
Error taxonomy and handler for mnemonic derivation and artifact emission
"""

import logging
from contextlib import contextmanager
from typing import Generator, Type

logger = logging.getLogger(__name__)


class MnemonicGeneratorError(Exception):
    """Base exception for every failure raised by the key-set generator"""

    pass


class InvalidMnemonicError(MnemonicGeneratorError):
    """Mnemonic failed BIP39 wordlist/checksum validation"""

    pass


class InvalidPathError(MnemonicGeneratorError):
    """Output directory is missing or unusable"""

    pass


class EncodingError(MnemonicGeneratorError):
    """Entropy could not be encoded into a mnemonic phrase"""

    pass


class ArtifactWriteError(MnemonicGeneratorError):
    """Creating or writing an artifact file failed"""

    pass


class KeyDerivationError(MnemonicGeneratorError):
    """Validator key material could not be derived from a mnemonic"""

    pass


@contextmanager
def keygen_error_handler(
    operation: str, error_cls: Type[MnemonicGeneratorError]
) -> Generator[None, None, None]:
    """
    Context manager translating collaborator failures into the generator's
    error taxonomy.

    Errors that already belong to the taxonomy pass through untouched so the
    most specific cause reaches the caller.

    Args:
        operation: Name of the operation being performed
        error_cls: Taxonomy class to raise for foreign exceptions
    """
    try:
        yield
    except MnemonicGeneratorError:
        raise
    except Exception as e:
        logger.error(f"Error in key generation step '{operation}': {e}")
        raise error_cls(f"Failed {operation}: {e}") from e
