"""Pydantic models for wallets and accounts."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..normalizers.hexbytes import HexNormalizer


class Account(BaseModel):
    """An account inside a wallet.

    Distributed accounts hold a share of a key; their ``composite_public_key``
    is the aggregate key the network knows the validator by.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    public_key: Optional[bytes] = None
    composite_public_key: Optional[bytes] = None
    signing_threshold: Optional[int] = Field(default=None, ge=1)

    @field_validator("public_key", "composite_public_key", mode="before")
    @classmethod
    def parse_key(cls, v):
        if isinstance(v, str):
            return HexNormalizer.decode(v)
        return v

    @property
    def is_distributed(self) -> bool:
        return self.composite_public_key is not None


class Wallet(BaseModel):
    """A named collection of accounts."""

    name: str = Field(..., min_length=1)
    accounts: list[Account] = Field(default_factory=list)

    def account(self, name: str) -> Optional[Account]:
        """Find an account by name."""
        for account in self.accounts:
            if account.name == name:
                return account
        return None
