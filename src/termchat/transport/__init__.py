"""Chat transport module for termchat.

The network collaborator of the UI loop: sends outgoing lines and streams
incoming messages.
"""

from .base import ChatTransport
from .factory import create_transport
from .loopback import LoopbackTransport

__all__ = [
    "ChatTransport",
    "LoopbackTransport",
    "create_transport",
]
