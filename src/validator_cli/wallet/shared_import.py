"""
Input gathering for the wallet shared-import command.

Options come from command-line flags layered over ``VALIDATOR_CLI_*``
environment variables (and ``.env``). ``gather_input`` validates them and
returns an immutable ``ImportInput``; the import itself is performed by
the wallet store.
"""

from datetime import timedelta
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from ..exceptions import (
    ImportFileError,
    InvalidDurationError,
    InvalidOptionError,
    MissingOptionError,
    RemoteWalletNotSupportedError,
)
from ..logging import get_logger
from ..normalizers.duration import DurationNormalizer


logger = get_logger(__name__)


class ImportEnvironment(BaseSettings):
    """Import options read from the environment.

    Values are kept as plain strings; ``gather_input`` does the parsing so
    flags and environment go through the same checks.
    """

    remote: Optional[str] = None
    timeout: Optional[str] = None
    quiet: Optional[bool] = None
    verbose: Optional[bool] = None
    debug: Optional[bool] = None
    file: Optional[str] = None
    shares: Optional[str] = None

    model_config = {
        "env_prefix": "VALIDATOR_CLI_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class ImportInput(BaseModel):
    """Validated input for a shared import."""

    model_config = ConfigDict(frozen=True)

    timeout: timedelta
    quiet: bool = False
    verbose: bool = False
    debug: bool = False
    file: bytes = Field(repr=False)
    shares: tuple[str, ...]


def merge_options(flags: Mapping[str, Any], environment: Optional[ImportEnvironment] = None) -> dict[str, Any]:
    """Layer flags that were given (not None) over environment values.

    Raises:
        InvalidOptionError: An environment variable has an unusable value.
    """
    if environment is None:
        try:
            environment = ImportEnvironment()
        except PydanticValidationError as e:
            error = e.errors()[0]
            option = ".".join(str(part) for part in error["loc"])
            raise InvalidOptionError(option, error.get("input"), error["msg"], cause=e) from e
    merged = environment.model_dump()
    merged.update({k: v for k, v in flags.items() if v is not None})
    return merged


def _split_shares(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [share.strip() for share in value if share and share.strip()]


def gather_input(options: Mapping[str, Any]) -> ImportInput:
    """
    Validate shared-import options.

    Args:
        options: Option values keyed by name (remote, timeout, quiet,
            verbose, debug, file, shares).

    Returns:
        ImportInput with the import file contents loaded.

    Raises:
        RemoteWalletNotSupportedError: A remote wallet was given.
        MissingOptionError: timeout, file or shares is missing.
        InvalidDurationError: timeout is not a duration.
        ImportFileError: The import file cannot be read.
    """
    remote = options.get("remote") or ""
    if remote:
        raise RemoteWalletNotSupportedError(remote)

    try:
        timeout = DurationNormalizer.parse(options.get("timeout"))
    except ValueError as e:
        raise InvalidDurationError("timeout", options.get("timeout")) from e
    if timeout == timedelta(0):
        raise MissingOptionError("timeout")

    filepath = options.get("file") or ""
    if not filepath:
        raise MissingOptionError("file")
    try:
        data = Path(filepath).read_bytes()
    except OSError as e:
        raise ImportFileError(str(filepath), cause=e) from e

    shares = _split_shares(options.get("shares"))
    if not shares:
        raise MissingOptionError("shares")

    logger.debug("import_input_gathered", file_path=str(filepath), share_count=len(shares))
    return ImportInput(
        timeout=timeout,
        quiet=bool(options.get("quiet")),
        verbose=bool(options.get("verbose")),
        debug=bool(options.get("debug")),
        file=data,
        shares=tuple(shares),
    )
