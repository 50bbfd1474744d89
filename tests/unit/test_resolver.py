"""Unit tests for validator identifier resolution."""

import asyncio

import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from validator_cli.accounts.store import InMemoryAccountProvider
from validator_cli.config import ResolverSettings
from validator_cli.exceptions import (
    AccountResolutionError,
    InvalidIndexError,
    InvalidPublicKeyError,
    InvalidRangeBoundError,
    LookupFailedError,
    MalformedRangeError,
    UnknownValidatorError,
)
from validator_cli.models.account import Account, Wallet
from validator_cli.resolver import ValidatorResolver

from conftest import RecordingProvider, make_validator, pubkey_for


@pytest.fixture
def resolver(provider):
    return ValidatorResolver(provider)


class TestResolveValidatorIndex:
    """Bare index identifiers."""

    @pytest.mark.asyncio
    async def test_single_lookup_with_singleton(self, resolver, provider):
        validator = await resolver.resolve_validator("5")
        assert validator.index == 5
        assert provider.calls == [("validators", "head", [5])]

    @pytest.mark.asyncio
    async def test_leading_zeros_accepted(self, resolver, provider):
        validator = await resolver.resolve_validator("007")
        assert validator.index == 7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["abc", "", "+5", " 5", "1_0", "5.0", "18446744073709551616"])
    async def test_invalid_index(self, resolver, provider, identifier):
        with pytest.raises(InvalidIndexError) as exc_info:
            await resolver.resolve_validator(identifier)
        assert exc_info.value.identifier == identifier
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_max_uint64_is_valid(self, resolver, provider):
        with pytest.raises(UnknownValidatorError):
            await resolver.resolve_validator("18446744073709551615")
        assert provider.calls == [("validators", "head", [2**64 - 1])]

    @pytest.mark.asyncio
    async def test_no_match_is_unknown(self, resolver):
        with pytest.raises(UnknownValidatorError) as exc_info:
            await resolver.resolve_validator("500")
        assert exc_info.value.identifier == "500"
        assert exc_info.value.cause is None

    @pytest.mark.asyncio
    async def test_state_id_passed_through(self, resolver, provider):
        await resolver.resolve_validator("3", state_id="0x" + "ab" * 32)
        assert provider.calls == [("validators", "0x" + "ab" * 32, [3])]


class TestResolveValidatorPublicKey:
    """0x public key identifiers."""

    @pytest.mark.asyncio
    async def test_single_pubkey_lookup(self, resolver, provider):
        key = pubkey_for(4)
        validator = await resolver.resolve_validator("0x" + key.hex())
        assert validator.index == 4
        assert provider.calls == [("validators_by_pubkey", "head", [key])]

    @pytest.mark.asyncio
    async def test_uppercase_hex(self, resolver):
        validator = await resolver.resolve_validator("0x" + pubkey_for(4).hex().upper())
        assert validator.index == 4

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["0xzz", "0xabc", "0xab cd", "0x" + "g" * 96])
    async def test_malformed_hex(self, resolver, provider, identifier):
        with pytest.raises(InvalidPublicKeyError) as exc_info:
            await resolver.resolve_validator(identifier)
        assert exc_info.value.reason == "invalid hex"
        assert provider.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", [0, 32, 47, 49])
    async def test_wrong_length_rejected_by_default(self, resolver, provider, length):
        with pytest.raises(InvalidPublicKeyError) as exc_info:
            await resolver.resolve_validator("0x" + "11" * length)
        assert exc_info.value.reason == "wrong length"
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_short_key_zero_padded_in_legacy_mode(self, provider):
        resolver = ValidatorResolver(provider, strict_public_key_length=False)
        with pytest.raises(UnknownValidatorError):
            await resolver.resolve_validator("0xb0")
        assert provider.calls == [("validators_by_pubkey", "head", [b"\xb0" + b"\x00" * 47])]

    @pytest.mark.asyncio
    async def test_long_key_truncated_in_legacy_mode(self, provider):
        resolver = ValidatorResolver(provider, strict_public_key_length=False)
        key = pubkey_for(9)
        validator = await resolver.resolve_validator("0x" + key.hex() + "ffff")
        assert validator.index == 9
        assert provider.calls == [("validators_by_pubkey", "head", [key])]

    @pytest.mark.asyncio
    async def test_no_match_is_unknown(self, resolver):
        with pytest.raises(UnknownValidatorError):
            await resolver.resolve_validator("0x" + "ee" * 48)

    @pytest.mark.asyncio
    async def test_multiple_matches_select_lowest_index(self, log_events):
        matches = {12: make_validator(12), 3: make_validator(3), 8: make_validator(8)}
        provider = RecordingProvider(pubkey_matches=matches)
        resolver = ValidatorResolver(provider)

        validator = await resolver.resolve_validator("0x" + pubkey_for(3).hex())

        assert validator.index == 3
        ambiguous = [e for e in log_events() if e["event"] == "ambiguous_match"]
        assert ambiguous[0]["matched_indices"] == [3, 8, 12]
        assert ambiguous[0]["selected_index"] == 3


class TestResolveValidatorAccount:
    """wallet/account identifiers."""

    @pytest.fixture
    def accounts(self):
        return InMemoryAccountProvider([
            Wallet(name="Validators", accounts=[
                Account(name="1", public_key=pubkey_for(1)),
                Account(name="shared", public_key=pubkey_for(99), composite_public_key=pubkey_for(7)),
                Account(name="empty"),
                Account(name="short", public_key=b"\x01" * 32),
            ]),
        ])

    @pytest.mark.asyncio
    async def test_account_public_key(self, provider, accounts):
        resolver = ValidatorResolver(provider, accounts)
        validator = await resolver.resolve_validator("Validators/1")
        assert validator.index == 1
        assert provider.calls == [("validators_by_pubkey", "head", [pubkey_for(1)])]

    @pytest.mark.asyncio
    async def test_distributed_account_uses_composite_key(self, provider, accounts):
        resolver = ValidatorResolver(provider, accounts)
        validator = await resolver.resolve_validator("Validators/shared")
        assert validator.index == 7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["Unknown/1", "Validators/2", "/1", "Validators/"])
    async def test_unresolvable_account(self, provider, accounts, path):
        resolver = ValidatorResolver(provider, accounts)
        with pytest.raises(AccountResolutionError) as exc_info:
            await resolver.resolve_validator(path)
        assert exc_info.value.message == "unable to obtain account"
        assert exc_info.value.cause is not None
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_account_without_key(self, provider, accounts):
        resolver = ValidatorResolver(provider, accounts)
        with pytest.raises(AccountResolutionError) as exc_info:
            await resolver.resolve_validator("Validators/empty")
        assert exc_info.value.message == "unable to obtain public key for account"

    @pytest.mark.asyncio
    async def test_account_key_wrong_length(self, provider, accounts):
        resolver = ValidatorResolver(provider, accounts)
        with pytest.raises(AccountResolutionError):
            await resolver.resolve_validator("Validators/short")

    @pytest.mark.asyncio
    async def test_no_account_provider(self, resolver):
        with pytest.raises(AccountResolutionError):
            await resolver.resolve_validator("Validators/1")

    @pytest.mark.asyncio
    async def test_hex_prefix_wins_over_path(self, provider, accounts):
        resolver = ValidatorResolver(provider, accounts)
        with pytest.raises(InvalidPublicKeyError):
            await resolver.resolve_validator("0xwallet/account")


class TestResolveValidators:
    """List resolution including ranges."""

    @pytest.mark.asyncio
    async def test_range_single_batched_lookup(self, resolver, provider):
        result = await resolver.resolve_validators(["10-12"])
        assert [v.index for v in result] == [10, 11, 12]
        assert provider.calls == [("validators", "head", [10, 11, 12])]

    @pytest.mark.asyncio
    async def test_range_length_matches_found(self, resolver, provider):
        result = await resolver.resolve_validators(["18-25"])
        assert len(result) == 2
        assert provider.calls == [("validators", "head", list(range(18, 26)))]

    @pytest.mark.asyncio
    async def test_single_element_range(self, resolver):
        result = await resolver.resolve_validators(["4-4"])
        assert [v.index for v in result] == [4]

    @pytest.mark.asyncio
    async def test_range_with_no_matches_is_empty(self, resolver):
        assert await resolver.resolve_validators(["100-105"]) == []

    @pytest.mark.asyncio
    async def test_inverted_range_is_empty(self, resolver, provider, log_events):
        assert await resolver.resolve_validators(["12-10"]) == []
        assert provider.calls == []
        warnings = [e for e in log_events() if e["event"] == "inverted_range"]
        assert warnings[0]["low"] == 12
        assert warnings[0]["high"] == 10

    @pytest.mark.asyncio
    async def test_inverted_range_rejected_when_strict(self, provider):
        resolver = ValidatorResolver(provider, reject_inverted_ranges=True)
        with pytest.raises(MalformedRangeError):
            await resolver.resolve_validators(["12-10"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["1-2-3", "1--2", "--", "1-2-"])
    async def test_malformed_range(self, resolver, provider, identifier):
        with pytest.raises(MalformedRangeError) as exc_info:
            await resolver.resolve_validators([identifier])
        assert exc_info.value.identifier == identifier
        assert provider.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier,bound", [
        ("a-5", "start"),
        ("-5", "start"),
        ("5-b", "end"),
        ("5-", "end"),
        ("my-wallet/1", "start"),
    ])
    async def test_invalid_range_bound(self, resolver, identifier, bound):
        with pytest.raises(InvalidRangeBoundError) as exc_info:
            await resolver.resolve_validators([identifier])
        assert exc_info.value.bound == bound
        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.asyncio
    async def test_mixed_list_grouping(self, resolver, provider):
        key = pubkey_for(17)
        result = await resolver.resolve_validators(["5", "10-12", "0x" + key.hex()])
        assert [v.index for v in result] == [5, 10, 11, 12, 17]
        assert provider.calls == [
            ("validators", "head", [5]),
            ("validators", "head", [10, 11, 12]),
            ("validators_by_pubkey", "head", [key]),
        ]

    @pytest.mark.asyncio
    async def test_repeated_identifiers_repeat_lookups(self, resolver, provider):
        result = await resolver.resolve_validators(["3", "3"])
        assert [v.index for v in result] == [3, 3]
        assert len(provider.calls) == 2

    @pytest.mark.asyncio
    async def test_non_range_failure_wrapped_as_unknown(self, resolver):
        with pytest.raises(UnknownValidatorError) as exc_info:
            await resolver.resolve_validators(["1", "abc"])
        assert exc_info.value.identifier == "abc"
        assert isinstance(exc_info.value.cause, InvalidIndexError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    @pytest.mark.asyncio
    async def test_missing_single_validator_fails_whole_list(self, resolver, provider):
        with pytest.raises(UnknownValidatorError) as exc_info:
            await resolver.resolve_validators(["1", "999", "2"])
        assert isinstance(exc_info.value.cause, UnknownValidatorError)
        # Resolution stops at the first failure.
        assert len(provider.calls) == 2

    @pytest.mark.asyncio
    async def test_empty_input(self, resolver, provider):
        assert await resolver.resolve_validators([]) == []
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_input_not_mutated(self, resolver):
        identifiers = ["1", "2-3"]
        await resolver.resolve_validators(identifiers)
        assert identifiers == ["1", "2-3"]

    @pytest.mark.asyncio
    async def test_state_id_from_settings(self, provider):
        resolver = ValidatorResolver(provider, settings=ResolverSettings(state_id="finalized"))
        await resolver.resolve_validators(["1", "2-3"])
        assert {call[1] for call in provider.calls} == {"finalized"}


class TestLookupFailures:
    """Collaborator failures and cancellation."""

    @pytest.mark.asyncio
    async def test_range_lookup_failure(self, validators):
        error = ConnectionError("beacon node unreachable")
        resolver = ValidatorResolver(RecordingProvider(validators, fail_with=error))
        with pytest.raises(LookupFailedError) as exc_info:
            await resolver.resolve_validators(["1-3"])
        assert exc_info.value.identifier == "1-3"
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_single_lookup_failure(self, validators):
        error = ConnectionError("beacon node unreachable")
        resolver = ValidatorResolver(RecordingProvider(validators, fail_with=error))
        with pytest.raises(LookupFailedError) as exc_info:
            await resolver.resolve_validator("1")
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_single_lookup_failure_in_list(self, validators):
        error = ConnectionError("beacon node unreachable")
        resolver = ValidatorResolver(RecordingProvider(validators, fail_with=error))
        with pytest.raises(UnknownValidatorError) as exc_info:
            await resolver.resolve_validators(["1"])
        assert isinstance(exc_info.value.cause, LookupFailedError)
        assert exc_info.value.cause.cause is error

    @pytest.mark.asyncio
    async def test_collaborator_timeout_surfaces_as_cause(self, validators):
        resolver = ValidatorResolver(RecordingProvider(validators, fail_with=TimeoutError()))
        with pytest.raises(LookupFailedError) as exc_info:
            await resolver.resolve_validators(["0-1"])
        assert isinstance(exc_info.value.cause, TimeoutError)

    @pytest.mark.asyncio
    async def test_caller_timeout_cancels_lookup(self, validators):
        provider = RecordingProvider(validators, delay=5.0)
        resolver = ValidatorResolver(provider)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(resolver.resolve_validators(["1", "2"]), timeout=0.05)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, validators):
        provider = RecordingProvider(validators, delay=5.0)
        resolver = ValidatorResolver(provider)
        task = asyncio.create_task(resolver.resolve_validators(["1-3"]))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
