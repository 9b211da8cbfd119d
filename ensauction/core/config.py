"""
Registrar configuration parameters for ensauction.

Defines auction timing, name policy, economic floors and ledger limits.
Components receive a RegistrarConfig explicitly; there is no process-wide
ledger handle.
"""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ENSAUCTION_"

WEI_PER_ETHER = 10**18


class RegistrarConfig(BaseModel):
    """Registrar-wide configuration parameters"""

    model_config = {"frozen": True}

    # Ledger access
    ledger_timeout: float = Field(5.0, gt=0)  # Seconds before a ledger call fails

    # Auction timing (seconds)
    total_auction_length: int = Field(5 * 24 * 3600, gt=0)
    reveal_period: int = Field(48 * 3600, gt=0)  # Reveal window before registration date

    # Name policy
    root_suffix: str = "eth"
    min_label_length: int = Field(7, ge=1)

    # Economics
    min_price: int = Field(WEI_PER_ETHER // 100, ge=0)  # 0.01 ether

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    log_to_file: bool = False

    @field_validator("root_suffix")
    @classmethod
    def _strip_suffix(cls, value: str) -> str:
        value = value.strip().strip(".").lower()
        if not value or "." in value:
            raise ValueError("root_suffix must be a single label")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {value}")
        return value

    @field_validator("reveal_period")
    @classmethod
    def _reveal_inside_auction(cls, value: int, info) -> int:
        total = info.data.get("total_auction_length")
        if total is not None and value >= total:
            raise ValueError("reveal_period must be shorter than total_auction_length")
        return value


# Default config instance (components may be handed any other)
config = RegistrarConfig()


def load_config(env_file: Optional[str] = None) -> RegistrarConfig:
    """
    Load configuration from environment variables.

    Variables are named ENSAUCTION_<FIELD> (e.g. ENSAUCTION_LEDGER_TIMEOUT).
    A .env file is read first when present, searched for upward from the
    working directory unless given; real environment variables win.

    Args:
        env_file: Optional path to a dotenv file

    Returns:
        RegistrarConfig instance
    """
    dotenv_path = env_file or find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    values = {}
    for field_name in RegistrarConfig.model_fields:
        raw = os.environ.get(ENV_PREFIX + field_name.upper())
        if raw is not None:
            values[field_name] = raw

    return RegistrarConfig(**values)
