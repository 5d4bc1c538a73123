"""
Help command responder.
"""

import re
from typing import TYPE_CHECKING, Callable

from command.base import CommandPattern, ResponderConfig, TextResponse

if TYPE_CHECKING:
    from command.factory import ResponderRegistry


class HelpResponder:
    """Display help information about every registered responder."""

    def __init__(self, registry: "ResponderRegistry", config: ResponderConfig | None = None):
        self.registry = registry
        self.config = config or ResponderConfig()
        self.pattern = CommandPattern(
            "help",
            re.compile(rf"{re.escape(self.config.command_prefix)}help"),
            f"{self.config.command_prefix}help",
        )

    @property
    def name(self) -> str:
        return type(self).__name__

    def matches(self, message: str) -> bool:
        return self.pattern.matches(message)

    def compute(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        """Send the aggregate help text, split to the fragment ceiling."""
        if not self.matches(message):
            sink(TextResponse(f"couldn't compute message {message}"))
            return
        for fragment in self.registry.help_fragments():
            sink(fragment)

    def help(self) -> str:
        return f"Available commands for {self.name}\n    {self.pattern}"
