"""Pydantic models for validator records."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..normalizers.hexbytes import HexNormalizer, PUBLIC_KEY_LENGTH
from .enums import ValidatorStatus


FAR_FUTURE_EPOCH = 2**64 - 1


class Validator(BaseModel):
    """A validator record as returned by a validator-state lookup.

    Public keys and withdrawal credentials accept 0x-prefixed hex on input
    and serialize back to it in JSON. Balances are in Gwei.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    pubkey: bytes
    balance: int = Field(default=0, ge=0)
    status: ValidatorStatus = ValidatorStatus.ACTIVE_ONGOING
    effective_balance: int = Field(default=0, ge=0)
    slashed: bool = False
    withdrawal_credentials: Optional[bytes] = None
    activation_epoch: int = Field(default=FAR_FUTURE_EPOCH, ge=0)
    exit_epoch: int = Field(default=FAR_FUTURE_EPOCH, ge=0)

    @field_validator("pubkey", mode="before")
    @classmethod
    def parse_pubkey(cls, v):
        if isinstance(v, str):
            v = HexNormalizer.decode(v)
        if isinstance(v, (bytes, bytearray)) and len(v) != PUBLIC_KEY_LENGTH:
            raise ValueError(f"public key must be {PUBLIC_KEY_LENGTH} bytes")
        return v

    @field_validator("withdrawal_credentials", mode="before")
    @classmethod
    def parse_credentials(cls, v):
        if isinstance(v, str):
            return HexNormalizer.decode(v)
        return v

    @field_serializer("pubkey", "withdrawal_credentials", when_used="json")
    def serialize_bytes(self, value: Optional[bytes]) -> Optional[str]:
        """Serialize byte fields as 0x hex."""
        return HexNormalizer.encode(value) if value is not None else None

    @field_serializer("balance", "effective_balance", "activation_epoch", "exit_epoch", when_used="json")
    def serialize_uint64(self, value: int) -> str:
        """Serialize uint64 quantities as decimal strings, as beacon APIs do."""
        return str(value)

    @property
    def pubkey_hex(self) -> str:
        return HexNormalizer.encode(self.pubkey)
