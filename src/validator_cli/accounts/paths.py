"""Account path parsing and public key selection."""

from ..exceptions import InvalidAccountPathError, NoPublicKeyError
from ..models.account import Account


def split_account_path(path: str) -> tuple[str, str]:
    """
    Split 'wallet/account' into its wallet and account names.

    The split happens at the first '/', so account names may themselves
    contain '/'.

    Examples:
    - 'Validators/1' -> ('Validators', '1')
    - 'Primary/keys/3' -> ('Primary', 'keys/3')

    Raises:
        InvalidAccountPathError: If either part is empty or there is no '/'
    """
    wallet_name, sep, account_name = path.partition("/")
    if not sep:
        raise InvalidAccountPathError(path, "missing '/' separator")
    if not wallet_name:
        raise InvalidAccountPathError(path, "no wallet name")
    if not account_name:
        raise InvalidAccountPathError(path, "no account name")
    return wallet_name, account_name


def best_public_key(account: Account) -> bytes:
    """
    Public key the network knows an account's validator by.

    Distributed accounts are known by their composite key; all others by
    their own public key.

    Raises:
        NoPublicKeyError: If the account exposes neither key
    """
    if account.composite_public_key is not None:
        return account.composite_public_key
    if account.public_key is not None:
        return account.public_key
    raise NoPublicKeyError(account.name)
