"""Field element parsing and deterministic account address computation."""

from typing import Optional, Sequence, Union

from starknet_py.constants import FIELD_PRIME
from starknet_py.hash.address import compute_address

from account_bootstrap.errors import EncodingError

# Accounts deployed with DEPLOY_ACCOUNT have no deployer
DEPLOYER_ADDRESS = 0


def parse_felt(value: Union[int, str], name: str = "value") -> int:
    """Convert an int or a 0x-prefixed hex string into a field element."""
    if isinstance(value, bool):
        raise EncodingError(f"{name} must be a field element, got {value!r}")
    if isinstance(value, int):
        felt = value
    elif isinstance(value, str):
        text = value.strip()
        if not text.lower().startswith("0x"):
            raise EncodingError(f"{name} must be a 0x-prefixed hex string: {value!r}")
        try:
            felt = int(text, 16)
        except ValueError as e:
            raise EncodingError(f"{name} is not valid hexadecimal: {value!r}") from e
    else:
        raise EncodingError(f"{name} must be an int or hex string, got {type(value).__name__}")

    if not 0 <= felt < FIELD_PRIME:
        raise EncodingError(f"{name} is outside the Stark field: {hex(felt)}")
    return felt


def precompute_address(
    public_key: int,
    class_hash: Union[int, str],
    constructor_calldata: Optional[Sequence[int]] = None,
    salt: Optional[int] = None,
) -> int:
    """Calculate the address an account contract will be deployed at.

    OpenZeppelin accounts take the public key as their only constructor
    argument and use it as the salt, which are the defaults here.
    """
    public_key = parse_felt(public_key, "public key")
    class_hash = parse_felt(class_hash, "class hash")
    if constructor_calldata is None:
        constructor_calldata = [public_key]
    if salt is None:
        salt = public_key

    return compute_address(
        class_hash=class_hash,
        constructor_calldata=list(constructor_calldata),
        salt=parse_felt(salt, "salt"),
        deployer_address=DEPLOYER_ADDRESS,
    )
