"""Exception hierarchy shared by the daemon gateway and the runtime."""

from __future__ import annotations


class SpoilerError(Exception):
    """Base class for errors raised by spoiler itself."""


class GatewayError(SpoilerError):
    """A daemon call failed: unreachable daemon, RPC error, or bad payload."""
