"""Demo account loader and Pydantic models."""

import logging
import secrets
from pathlib import Path
from typing import Annotated

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from portal.config.settings import get_settings
from portal.session.state import Role

logger = logging.getLogger(__name__)


class AccountConfig(BaseModel):
    """A single demo login."""

    username: Annotated[str, Field(min_length=1, max_length=100)]
    password: Annotated[str, Field(min_length=1, max_length=200)]
    role: Role

    @field_validator("role")
    @classmethod
    def role_is_assignable(cls, v: Role) -> Role:
        """Reject the placeholder role used by anonymous sessions."""
        if v == Role.NONE:
            raise ValueError("account role must be patient, clinic or government")
        return v


class AccountsConfig(BaseModel):
    """Root configuration for all demo accounts."""

    accounts: list[AccountConfig] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_unique_usernames(self) -> "AccountsConfig":
        """Validate that no username is declared twice."""
        seen: set[str] = set()
        for account in self.accounts:
            if account.username in seen:
                raise ValueError(f"duplicate username '{account.username}'")
            seen.add(account.username)
        return self

    def authenticate(self, username: str, password: str) -> AccountConfig | None:
        """Check a credential pair against the configured accounts.

        Args:
            username: Submitted username.
            password: Submitted password.

        Returns:
            The matching account, or None if the pair is not valid.
        """
        for account in self.accounts:
            if account.username == username:
                if secrets.compare_digest(
                    account.password.encode("utf-8"), password.encode("utf-8")
                ):
                    return account
                return None
        return None


class ConfigLoadError(Exception):
    """Raised when configuration loading fails."""

    pass


def load_accounts_config(config_path: str | Path | None = None) -> AccountsConfig:
    """Load and validate demo accounts from a YAML file.

    Args:
        config_path: Path to the YAML file. If None, uses settings.

    Returns:
        Validated AccountsConfig instance.

    Raises:
        ConfigLoadError: If the file cannot be read or validation fails.
    """
    if config_path is None:
        config_path = get_settings().accounts_path

    path = Path(config_path)

    if not path.exists():
        raise ConfigLoadError(f"Accounts file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Failed to read {path}: {e}") from e

    if raw_config is None:
        raise ConfigLoadError(f"Empty accounts file: {path}")

    try:
        config = AccountsConfig.model_validate(raw_config)
    except ValueError as e:
        raise ConfigLoadError(f"Accounts validation failed: {e}") from e

    logger.debug("Loaded %d demo accounts from %s", len(config.accounts), path)
    return config
