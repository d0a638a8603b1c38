from __future__ import annotations


class CustomerStoreError(RuntimeError):
    pass


class ConstraintViolation(CustomerStoreError):
    """A write was rejected by a store constraint (duplicate customer id)."""


class TransportFailure(CustomerStoreError):
    """The store or a remote service could not complete the call."""


class ReviewSourceError(TransportFailure):
    pass
