"""
Command system for the ticker chatroom.
Provides the responder contract, registry, and responder implementations.
"""

from command.base import CommandPattern, Responder, ResponderConfig, TextResponse
from command.factory import ResponderRegistry, register_builtin_responders

__all__ = [
    'CommandPattern',
    'Responder',
    'ResponderConfig',
    'ResponderRegistry',
    'TextResponse',
    'register_builtin_responders'
]
