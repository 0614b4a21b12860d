"""Factory for creating chat transports."""

from typing import Any

from .base import ChatTransport


def create_transport(
    backend: str = "loopback",
    **kwargs: Any
) -> ChatTransport:
    """Create a chat transport.

    Args:
        backend: Transport type ("loopback")
        **kwargs: Backend-specific configuration
            For loopback:
                - echo_author: str (default: 'echo')
                - date_format: str (default: '%H:%M:%S')

    Returns:
        ChatTransport instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "loopback":
        from .loopback import LoopbackTransport
        return LoopbackTransport(**kwargs)

    raise ValueError(
        f"Unsupported transport backend: {backend}. "
        f"Supported backends: loopback"
    )
