"""Pytest configuration and fixtures."""

import asyncio
import io
import json
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from validator_cli.config import reset_settings
from validator_cli.logging import configure_logging
from validator_cli.models.validator import Validator


def pubkey_for(index: int) -> bytes:
    """Deterministic 48-byte public key for a validator index."""
    return b"\xa0" + index.to_bytes(47, "big")


def make_validator(index: int, **overrides) -> Validator:
    """Build a validator record with sensible defaults."""
    fields = {
        "index": index,
        "pubkey": pubkey_for(index),
        "balance": 32_000_000_000,
        "effective_balance": 32_000_000_000,
        "activation_epoch": 0,
    }
    fields.update(overrides)
    return Validator(**fields)


class RecordingProvider:
    """Validators provider double that records every lookup it receives."""

    def __init__(self, validators=(), fail_with=None, delay=0.0, pubkey_matches=None):
        self.by_index = {v.index: v for v in validators}
        self.by_pubkey = {v.pubkey: v for v in validators}
        self.fail_with = fail_with
        self.delay = delay
        self.pubkey_matches = pubkey_matches
        self.calls = []

    async def _respond(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

    async def validators(self, state_id, indices):
        self.calls.append(("validators", state_id, list(indices)))
        await self._respond()
        return {i: self.by_index[i] for i in indices if i in self.by_index}

    async def validators_by_pubkey(self, state_id, pubkeys):
        self.calls.append(("validators_by_pubkey", state_id, list(pubkeys)))
        await self._respond()
        if self.pubkey_matches is not None:
            return dict(self.pubkey_matches)
        found = [self.by_pubkey[k] for k in pubkeys if k in self.by_pubkey]
        return {v.index: v for v in found}


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from VALIDATOR_CLI_* variables and cached settings."""
    for key in list(os.environ.keys()):
        if key.startswith("VALIDATOR_CLI_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def log_stream():
    """Capture JSON log output at DEBUG level."""
    stream = io.StringIO()
    configure_logging(log_level="DEBUG", log_format="json", stream=stream)
    return stream


@pytest.fixture
def log_events(log_stream):
    """Return a callable listing the structlog entries written so far.

    Plain stdlib records from other libraries (asyncio, pytest plugins) share
    the root handler and are skipped.
    """

    def _events():
        return [
            json.loads(line)
            for line in log_stream.getvalue().splitlines()
            if line.startswith("{")
        ]

    return _events


@pytest.fixture
def validators():
    """Validators 0..19 at the head state."""
    return [make_validator(i) for i in range(20)]


@pytest.fixture
def provider(validators):
    """Recording provider holding validators 0..19."""
    return RecordingProvider(validators)


@pytest.fixture
def snapshot_file(tmp_path, validators):
    """Validator snapshot on disk, keyed by state identifier."""
    path = tmp_path / "snapshot.json"
    data = {
        "head": [v.model_dump(mode="json") for v in validators],
        "finalized": [v.model_dump(mode="json") for v in validators[:5]],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def accounts_file(tmp_path):
    """Wallet file with a plain account and a distributed account."""
    path = tmp_path / "wallets.json"
    data = [
        {
            "name": "Validators",
            "accounts": [
                {"name": "1", "public_key": "0x" + pubkey_for(1).hex()},
                {
                    "name": "shared",
                    "public_key": "0x" + pubkey_for(99).hex(),
                    "composite_public_key": "0x" + pubkey_for(7).hex(),
                    "signing_threshold": 2,
                },
            ],
        }
    ]
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
