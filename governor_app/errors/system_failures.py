"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that either halt the governor before the
loop starts or take a whole network out of service.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PreconditionError(SystemFailureError):
    """Required startup configuration is missing; the loop must not start."""

    def __init__(self, message: str, missing: Optional[list[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing = missing or []


class NetworkInitError(SystemFailureError):
    """A network session could not be established."""

    def __init__(self, message: str, network: Optional[str] = None,
                 rpc_url: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.network = network
        self.rpc_url = rpc_url


class PersistenceError(SystemFailureError):
    """Trust score file persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
