"""
Base data structures and the responder contract for the command system.
"""

import os
import re
from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar, runtime_checkable

DEFAULT_MAX_FRAGMENT_LENGTH = 2000
DEFAULT_COMMAND_PREFIX = "$"

# One or more symbol characters, at most 20
SYMBOL_GRAMMAR = r"[A-Z0-9_.-]{1,20}"

T = TypeVar("T")


@dataclass(frozen=True)
class TextResponse:
    """One deliverable unit of text produced by a responder."""
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class CommandPattern:
    """A named, whole-message command pattern."""
    name: str
    regex: re.Pattern
    usage: str = ""

    def matches(self, message: str) -> bool:
        if not isinstance(message, str):
            return False
        return self.regex.fullmatch(message) is not None

    def __str__(self) -> str:
        return self.regex.pattern


@dataclass
class ResponderConfig:
    """Configuration shared by the built-in responders."""

    max_fragment_length: int = DEFAULT_MAX_FRAGMENT_LENGTH
    command_prefix: str = DEFAULT_COMMAND_PREFIX

    def __post_init__(self):
        if self.max_fragment_length < 1:
            raise ValueError("max_fragment_length must be a positive integer")
        if not self.command_prefix:
            raise ValueError("command_prefix cannot be empty")

    @classmethod
    def from_env(cls) -> "ResponderConfig":
        """Build a config from MAX_FRAGMENT_LENGTH and COMMAND_PREFIX."""
        return cls(
            max_fragment_length=int(os.getenv("MAX_FRAGMENT_LENGTH", DEFAULT_MAX_FRAGMENT_LENGTH)),
            command_prefix=os.getenv("COMMAND_PREFIX", DEFAULT_COMMAND_PREFIX),
        )


@runtime_checkable
class Responder(Protocol[T]):
    """
    Capability set every command responder provides.

    Responders are composed into a registry rather than derived from a
    common base class. ``matches`` must be a pure function of the message
    and never raise. ``compute`` pushes zero or more fragments to ``sink``
    in display order and reports its own failures as fragments.
    """

    @property
    def name(self) -> str:
        """Responder name used for tagging and help output."""
        ...

    def matches(self, message: str) -> bool:
        """Return True if this responder claims the message."""
        ...

    def compute(self, message: str, sink: Callable[[T], None]) -> None:
        """
        Compute the reply for a matched message.

        Args:
            message: Raw chat message
            sink: Callable receiving each fragment in order
        """
        ...

    def help(self) -> str:
        """Human-readable description of every recognized command."""
        ...
