"""
Command parser for message handling.
"""

from command.base import DEFAULT_COMMAND_PREFIX


class CommandParser:
    """Parse chat messages into command tokens."""

    @staticmethod
    def is_command(message: str, prefix: str = DEFAULT_COMMAND_PREFIX) -> bool:
        """Check if message looks like a command (starts with the prefix)."""
        return message.strip().startswith(prefix)

    @staticmethod
    def tokens(message: str) -> list[str]:
        """
        Split a message on single spaces.

        Example:
            "$price BTC" -> ["$price", "BTC"]
            "$allTokens" -> ["$allTokens"]
        """
        return message.split(" ")

    @staticmethod
    def argument(message: str, index: int = 1) -> str | None:
        """Return the token at index, or None if the message is too short."""
        parts = CommandParser.tokens(message)
        if len(parts) > index and parts[index]:
            return parts[index]
        return None
