# kira_mnemonics/config/settings.py

import logging
import re
from dataclasses import dataclass

import coloredlogs
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ANSI color codes
YELLOW = "\033[93m"
RESET = "\033[0m"

# Tendermint peer ids are 20 bytes rendered as 40 hex chars
NODE_ID_REGEX = re.compile(r"(\b[a-fA-F0-9]{40}\b)")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HighlightFormatter(coloredlogs.ColoredFormatter):
    """Custom formatter to highlight node ids and validator addresses."""

    def format(self, record):
        formatted_message = super().format(record)
        try:
            formatted_message = NODE_ID_REGEX.sub(
                lambda match: f"{YELLOW}{match.group(1)}{RESET}", formatted_message
            )
        except re.error as format_err:
            logging.getLogger().exception(f"Error in HighlightFormatter: {format_err}")
        return formatted_message


class Settings(BaseSettings):
    """
    Central configuration for the mnemonic generator, loaded from environment
    variables (prefix ``KIRA_MNEMONICS_``) or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KIRA_MNEMONICS_",
    )

    # --- Key derivation defaults ---
    DEFAULT_PREFIX: str = Field(
        default="kira",
        description="Bech32 address prefix used when the caller does not override it",
    )
    DEFAULT_PATH: str = Field(
        default="44'/118'/0'/0/0",
        description="HD derivation path used when the caller does not override it",
    )

    # --- Artifact file names ---
    VALIDATOR_NODE_KEY_FILE_NAME: str = Field(default="validator_node_key.json")
    VALIDATOR_NODE_ID_FILE_NAME: str = Field(default="validator_node_id.key")
    PRIV_VALIDATOR_KEY_FILE_NAME: str = Field(default="priv_validator_key.json")
    MNEMONICS_ENV_FILE_NAME: str = Field(default="mnemonics.env")

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("DEFAULT_PREFIX", "DEFAULT_PATH")
    @classmethod
    def check_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}")
        return level


@dataclass(frozen=True)
class KeygenConfig:
    """
    Explicit configuration handed to the key-set generator.

    Defaults mirror the stock validator setup; build one from ``Settings``
    with :meth:`from_settings` to honour environment overrides.
    """

    address_prefix: str = "kira"
    hd_path: str = "44'/118'/0'/0/0"
    validator_node_key_file_name: str = "validator_node_key.json"
    validator_node_id_file_name: str = "validator_node_id.key"
    priv_validator_key_file_name: str = "priv_validator_key.json"
    mnemonics_env_file_name: str = "mnemonics.env"

    @classmethod
    def from_settings(cls, source: Settings) -> "KeygenConfig":
        return cls(
            address_prefix=source.DEFAULT_PREFIX,
            hd_path=source.DEFAULT_PATH,
            validator_node_key_file_name=source.VALIDATOR_NODE_KEY_FILE_NAME,
            validator_node_id_file_name=source.VALIDATOR_NODE_ID_FILE_NAME,
            priv_validator_key_file_name=source.PRIV_VALIDATOR_KEY_FILE_NAME,
            mnemonics_env_file_name=source.MNEMONICS_ENV_FILE_NAME,
        )


try:
    settings = Settings()
except ValueError as e:
    print(f"CRITICAL: Error loading settings: {e}. Using default values.")
    settings = Settings.model_construct()

# --- LOGGING CONFIGURATION (configured once here) ---
LOG_LEVEL_CONFIG = getattr(logging, settings.LOG_LEVEL, logging.INFO)

DEFAULT_LEVEL_STYLES = {
    "debug": {"color": "green"},
    "info": {"color": "cyan"},
    "warning": {"color": "yellow"},
    "error": {"color": "red"},
    "critical": {"bold": True, "color": "red"},
}
DEFAULT_FIELD_STYLES = {
    "asctime": {"color": "magenta"},
    "levelname": {"bold": True, "color": "blue"},
    "name": {"color": "white"},
}
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

highlight_formatter = HighlightFormatter(
    fmt=DEFAULT_FMT,
    level_styles=DEFAULT_LEVEL_STYLES,
    field_styles=DEFAULT_FIELD_STYLES,
)

coloredlogs.install(
    level=LOG_LEVEL_CONFIG,
    formatter=highlight_formatter,
    reconfigure=True,
)

logger = logging.getLogger(__name__)
logger.debug(
    f"Settings loaded. Log level set to {logging.getLevelName(LOG_LEVEL_CONFIG)}."
)
