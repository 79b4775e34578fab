"""Exception types raised by the DSC API."""

from typing import Any


class DSCAPIError(Exception):
    """Base class for all errors raised by this package."""


class InvalidAddressError(ValueError, DSCAPIError):
    """Value is not a valid Ethereum address."""


class InvalidPrivateKeyError(ValueError, DSCAPIError):
    """Value is not a usable private key."""


class InsufficientBalanceError(DSCAPIError):
    """Account balance does not cover the requested amount."""


class SignerNotSetError(DSCAPIError):
    """A write operation was attempted without a bound signer."""


class ContractCallError(DSCAPIError):
    """A contract call or transaction reverted or was rejected by the node."""


class NetworkError(DSCAPIError):
    """The RPC endpoint could not be reached."""


class TransactionTimeoutError(NetworkError):
    """A submitted transaction was not mined in time."""


class WorkflowStepError(DSCAPIError):
    """A step of a multi-transaction workflow failed.

    Earlier steps stay on-chain; nothing is rolled back.
    """

    def __init__(
        self,
        step: str,
        cause: Exception,
        completed_steps: list[dict[str, Any]] | None = None,
    ):
        self.step = step
        self.cause = cause
        self.completed_steps = completed_steps or []
        super().__init__(f"Step '{step}' failed: {cause}")
