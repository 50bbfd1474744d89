"""Resolution of user-supplied validator identifiers to validator records."""

from typing import Optional, Sequence, Mapping

from .accounts.paths import best_public_key
from .config import get_settings, ResolverSettings
from .exceptions import (
    AccountResolutionError,
    InvalidIndexError,
    InvalidPublicKeyError,
    InvalidRangeBoundError,
    LookupFailedError,
    MalformedRangeError,
    UnknownValidatorError,
)
from .logging import ResolverLogger
from .models.enums import IdentifierKind
from .models.validator import Validator
from .normalizers.hexbytes import HexNormalizer
from .normalizers.numbers import NumberNormalizer
from .providers.interface import AccountProvider, ValidatorsProvider


logger = ResolverLogger(__name__)


class ValidatorResolver:
    """
    Resolves validator identifiers against a validators provider.

    An identifier is one of:
    - a range 'low-high' of validator indices (inclusive)
    - a 0x-prefixed hex public key
    - a 'wallet/account' path, resolved through the account provider
    - a decimal validator index

    Lookups are awaited one at a time in input order. The resolver keeps
    no state between calls, so one instance may serve concurrent callers
    when its providers can.
    """

    def __init__(
        self,
        provider: ValidatorsProvider,
        account_provider: Optional[AccountProvider] = None,
        settings: Optional[ResolverSettings] = None,
        state_id: Optional[str] = None,
        strict_public_key_length: Optional[bool] = None,
        reject_inverted_ranges: Optional[bool] = None,
    ):
        """
        Initialize resolver.

        Args:
            provider: Validator-state lookup collaborator.
            account_provider: Wallet/account collaborator for path identifiers.
            settings: Optional ResolverSettings instance for Dependency Injection.
            state_id: Default state identifier for lookups.
            strict_public_key_length: Reject public keys that are not 48 bytes.
            reject_inverted_ranges: Reject ranges with start greater than end.
        """
        self._settings = settings or get_settings()
        self.provider = provider
        self.account_provider = account_provider

        self.state_id = state_id or self._settings.state_id
        self.strict_public_key_length = (
            strict_public_key_length if strict_public_key_length is not None
            else self._settings.strict_public_key_length
        )
        self.reject_inverted_ranges = (
            reject_inverted_ranges if reject_inverted_ranges is not None
            else self._settings.reject_inverted_ranges
        )

    # =========================================================================
    # Public API
    # =========================================================================

    async def resolve_validators(
        self, identifiers: Sequence[str], state_id: Optional[str] = None
    ) -> list[Validator]:
        """
        Resolve a list of identifiers to validators.

        Ranges contribute every validator the provider finds for them, in
        provider order, and may contribute none. Every other identifier
        contributes exactly one validator or fails.

        Args:
            identifiers: Identifier strings, resolved in order.
            state_id: State to resolve at; defaults to the resolver's.

        Returns:
            Validators grouped in identifier order.

        Raises:
            MalformedRangeError: A range does not have exactly two bounds.
            InvalidRangeBoundError: A range bound is not an unsigned integer.
            LookupFailedError: The provider failed while looking up a range.
            UnknownValidatorError: A non-range identifier did not resolve;
                the reason is available as ``cause``.
        """
        state_id = state_id or self.state_id
        logger.resolution_started(list(identifiers), state_id)

        validators: list[Validator] = []
        for identifier in identifiers:
            if IdentifierKind.classify(identifier) is IdentifierKind.RANGE:
                validators.extend(await self._resolve_range(identifier, state_id))
                continue
            try:
                validator = await self.resolve_validator(identifier, state_id)
            except Exception as e:
                raise UnknownValidatorError(identifier, cause=e) from e
            validators.append(validator)

        logger.resolution_completed(len(identifiers), len(validators))
        return validators

    async def resolve_validator(
        self, identifier: str, state_id: Optional[str] = None
    ) -> Validator:
        """
        Resolve a single public key, account path or index to one validator.

        When the provider reports more than one match the lowest validator
        index is returned.

        Raises:
            InvalidPublicKeyError: Bad hex, or wrong length in strict mode.
            AccountResolutionError: The account path could not be resolved.
            InvalidIndexError: The identifier is not an unsigned integer.
            LookupFailedError: The provider failed.
            UnknownValidatorError: The provider found no validator.
        """
        state_id = state_id or self.state_id
        kind = IdentifierKind.classify(identifier, allow_range=False)

        if kind is IdentifierKind.PUBLIC_KEY:
            pubkey = self._decode_public_key(identifier)
            matches = await self._lookup_by_pubkey(identifier, state_id, pubkey)
        elif kind is IdentifierKind.ACCOUNT:
            pubkey = await self._account_public_key(identifier)
            matches = await self._lookup_by_pubkey(identifier, state_id, pubkey)
        else:
            try:
                index = NumberNormalizer.parse_uint64(identifier)
            except ValueError as e:
                raise InvalidIndexError(identifier, cause=e) from e
            matches = await self._lookup_by_index(identifier, state_id, [index])

        return self._select(identifier, kind, matches)

    # =========================================================================
    # Helper Methods
    # =========================================================================

    async def _resolve_range(self, identifier: str, state_id: str) -> list[Validator]:
        bounds = identifier.split("-")
        if len(bounds) != 2:
            raise MalformedRangeError(identifier)

        try:
            low = NumberNormalizer.parse_uint64(bounds[0])
        except ValueError as e:
            raise InvalidRangeBoundError(identifier, "start", cause=e) from e
        try:
            high = NumberNormalizer.parse_uint64(bounds[1])
        except ValueError as e:
            raise InvalidRangeBoundError(identifier, "end", cause=e) from e

        if low > high:
            if self.reject_inverted_ranges:
                raise MalformedRangeError(identifier, "range start exceeds range end")
            logger.inverted_range(identifier, low, high)
            # An empty lookup would mean "all validators" to a beacon node.
            return []

        indices = NumberNormalizer.inclusive_range(low, high)
        matches = await self._lookup_by_index(identifier, state_id, indices)
        logger.range_resolved(identifier, requested=high - low + 1, found=len(matches))
        return list(matches.values())

    def _decode_public_key(self, identifier: str) -> bytes:
        try:
            data = HexNormalizer.decode(identifier)
        except ValueError as e:
            raise InvalidPublicKeyError(identifier, "invalid hex", cause=e) from e
        try:
            return HexNormalizer.fit_public_key(data, strict=self.strict_public_key_length)
        except ValueError as e:
            raise InvalidPublicKeyError(identifier, "wrong length", cause=e) from e

    async def _account_public_key(self, identifier: str) -> bytes:
        if self.account_provider is None:
            raise AccountResolutionError(identifier, "no wallet store available for account paths")
        try:
            _, account = await self.account_provider.wallet_and_account(identifier)
        except Exception as e:
            raise AccountResolutionError(identifier, cause=e) from e
        try:
            pubkey = best_public_key(account)
            return HexNormalizer.fit_public_key(pubkey, strict=self.strict_public_key_length)
        except Exception as e:
            raise AccountResolutionError(
                identifier, "unable to obtain public key for account", cause=e
            ) from e

    async def _lookup_by_index(
        self, identifier: str, state_id: str, indices: Sequence[int]
    ) -> Mapping[int, Validator]:
        try:
            return await self.provider.validators(state_id, indices)
        except Exception as e:
            raise LookupFailedError(identifier, cause=e) from e

    async def _lookup_by_pubkey(
        self, identifier: str, state_id: str, pubkey: bytes
    ) -> Mapping[int, Validator]:
        try:
            return await self.provider.validators_by_pubkey(state_id, [pubkey])
        except Exception as e:
            raise LookupFailedError(identifier, cause=e) from e

    def _select(
        self, identifier: str, kind: IdentifierKind, matches: Mapping[int, Validator]
    ) -> Validator:
        if not matches:
            raise UnknownValidatorError(identifier)

        index = min(matches)
        if len(matches) > 1:
            logger.ambiguous_match(identifier, sorted(matches), index)
        logger.identifier_resolved(identifier, kind.value, index)
        return matches[index]
