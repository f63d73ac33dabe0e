"""Errors raised by the gateway core.

Everything derives from GatewayError so the web layer can turn any of them
into a plain-text 500 without knowing which step failed.
"""


class GatewayError(Exception):
    """Base class for every failure the core reports to its caller."""


# =========================
# Store
# =========================
class StoreError(GatewayError):
    pass


class StoreTransportError(StoreError):
    """The request never produced a usable response (refused, timed out, undecodable body)."""


class StoreProtocolError(StoreError):
    """The store answered, but with a non-success status."""

    def __init__(self, status_code: int, body: str, action: str = "execute command"):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"failed to {action}, status code: {status_code}, body: {body}"
        )


# =========================
# Query / decoding
# =========================
class SortTokenRejected(GatewayError):
    def __init__(self, token: str):
        self.token = token
        super().__init__("mamba out")


class EnvelopeDecodeError(GatewayError):
    pass


# =========================
# Startup
# =========================
class ProvisioningError(GatewayError):
    pass
