"""Errors raised while bootstrapping an account."""


class BootstrapError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigError(BootstrapError):
    """Missing or invalid configuration, e.g. no STARKNET_RPC_URL."""


class NetworkError(BootstrapError):
    """An RPC round-trip to the node failed."""


class EncodingError(BootstrapError, ValueError):
    """A value could not be converted to a field element."""


class FeeOverflowError(BootstrapError, ArithmeticError):
    """Resource bounds do not fit the widths the network accepts."""


class CredentialStoreError(BootstrapError, OSError):
    """The credential file could not be read or written."""


class ConfirmationTimeout(BootstrapError, TimeoutError):
    """The transaction did not reach a final state in time."""

    def __init__(self, tx_hash: int, attempts: int):
        super().__init__(
            f"transaction {hex(tx_hash)} not confirmed after {attempts} attempts"
        )
        self.tx_hash = tx_hash
        self.attempts = attempts


class TransactionRejectedError(BootstrapError):
    """The network definitively rejected the transaction."""

    def __init__(self, tx_hash: int, reason: str = ""):
        message = f"transaction {hex(tx_hash)} was rejected"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.tx_hash = tx_hash
        self.reason = reason


class BlockStructureError(BootstrapError):
    """The node returned a block payload of an unexpected shape."""


class EmptyBlockError(BootstrapError):
    """The selected block lists no transactions."""
