"""Hex encoding helpers for public keys."""

import binascii


PUBLIC_KEY_LENGTH = 48


class HexNormalizer:
    """Handles 0x-prefixed hex strings."""

    PREFIX = "0x"

    @classmethod
    def strip_prefix(cls, text: str) -> str:
        if text.startswith(cls.PREFIX):
            return text[len(cls.PREFIX):]
        return text

    @classmethod
    def decode(cls, text: str) -> bytes:
        """
        Decode hex with an optional 0x prefix.

        Unlike ``bytes.fromhex`` this rejects embedded whitespace.

        Raises:
            ValueError: On odd length or non-hex characters.
        """
        try:
            return binascii.unhexlify(cls.strip_prefix(text))
        except binascii.Error as e:
            raise ValueError(str(e)) from e

    @classmethod
    def encode(cls, data: bytes) -> str:
        """'0x'-prefixed lowercase hex."""
        return cls.PREFIX + data.hex()

    @staticmethod
    def fit_public_key(data: bytes, strict: bool = True) -> bytes:
        """
        Fit decoded bytes to the public key length.

        In strict mode any other length is an error. Otherwise shorter input
        is zero-padded on the right and longer input is truncated.

        Raises:
            ValueError: In strict mode, when ``len(data) != 48``.
        """
        if len(data) == PUBLIC_KEY_LENGTH:
            return data
        if strict:
            raise ValueError(
                f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(data)}"
            )
        return data[:PUBLIC_KEY_LENGTH].ljust(PUBLIC_KEY_LENGTH, b"\x00")
