"""
In-memory validator state.

Holds validator records per state identifier and answers lookups from
memory. Records can be loaded from a JSON snapshot, either a list of
validators that applies to every state identifier or an object keyed by
state identifier.
"""

import asyncio
import json
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..exceptions import SnapshotError, StateNotFoundError
from ..logging import get_logger
from ..models.validator import Validator


logger = get_logger(__name__)

_validator_list = TypeAdapter(list[Validator])


class InMemoryValidatorsProvider:
    """
    Validators provider backed by dictionaries.

    Args:
        states: Validators per state identifier
        default: Validators served for any state identifier not in ``states``.
            When None, unknown state identifiers raise StateNotFoundError.
    """

    def __init__(
        self,
        states: Optional[Mapping[str, Iterable[Validator]]] = None,
        default: Optional[Iterable[Validator]] = None,
    ):
        self._by_index: dict[str, dict[int, Validator]] = {}
        self._by_pubkey: dict[str, dict[bytes, Validator]] = {}
        for state_id, validators in (states or {}).items():
            self._store(state_id, validators)

        self._default_index: Optional[dict[int, Validator]] = None
        self._default_pubkey: Optional[dict[bytes, Validator]] = None
        if default is not None:
            records = list(default)
            self._default_index = {v.index: v for v in records}
            self._default_pubkey = {v.pubkey: v for v in records}

    def _store(self, state_id: str, validators: Iterable[Validator]) -> None:
        records = list(validators)
        self._by_index[state_id] = {v.index: v for v in records}
        self._by_pubkey[state_id] = {v.pubkey: v for v in records}

    def _state(self, state_id: str) -> tuple[dict[int, Validator], dict[bytes, Validator]]:
        if state_id in self._by_index:
            return self._by_index[state_id], self._by_pubkey[state_id]
        if self._default_index is not None:
            return self._default_index, self._default_pubkey
        raise StateNotFoundError(state_id)

    @property
    def state_ids(self) -> list[str]:
        return list(self._by_index.keys())

    async def validators(
        self, state_id: str, indices: Sequence[int]
    ) -> dict[int, Validator]:
        by_index, _ = self._state(state_id)
        # Yield once so cancellation behaves as it would for a network lookup.
        await asyncio.sleep(0)
        if isinstance(indices, range):
            # Walk the known records, not the span, for wide ranges.
            return {i: by_index[i] for i in sorted(by_index) if i in indices}
        return {i: by_index[i] for i in indices if i in by_index}

    async def validators_by_pubkey(
        self, state_id: str, pubkeys: Sequence[bytes]
    ) -> dict[int, Validator]:
        _, by_pubkey = self._state(state_id)
        await asyncio.sleep(0)
        found = (by_pubkey[bytes(k)] for k in pubkeys if bytes(k) in by_pubkey)
        return {v.index: v for v in found}

    @classmethod
    def from_snapshot(cls, data: Union[list, dict], source: str = "<memory>") -> "InMemoryValidatorsProvider":
        """
        Build a provider from decoded snapshot JSON.

        Raises:
            SnapshotError: If the data is not a list or an object of lists of validators
        """
        try:
            if isinstance(data, list):
                return cls(default=_validator_list.validate_python(data))
            if isinstance(data, dict):
                return cls(states={
                    state_id: _validator_list.validate_python(records)
                    for state_id, records in data.items()
                })
        except PydanticValidationError as e:
            raise SnapshotError(source, str(e)) from e
        raise SnapshotError(source, f"expected a list or an object, got {type(data).__name__}")

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "InMemoryValidatorsProvider":
        """
        Load a provider from a JSON snapshot file.

        Raises:
            SnapshotError: If the file cannot be read or parsed
        """
        path = Path(filepath)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(str(path), str(e)) from e

        provider = cls.from_snapshot(data, source=str(path))
        logger.debug("snapshot_loaded", file_path=str(path), states=provider.state_ids)
        return provider
