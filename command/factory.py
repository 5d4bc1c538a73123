"""
Responder registry for routing chat messages to command responders.
"""

import logging
from typing import Callable, Iterator

from command.base import Responder, ResponderConfig, TextResponse
from command.chunking import split_into_parts
from pricing.types import PriceDataSource

logger = logging.getLogger(__name__)

TaggedSink = Callable[[str, TextResponse], None]


class ResponderRegistry:
    """Ordered, read-only-after-startup collection of responders."""

    def __init__(self, config: ResponderConfig | None = None):
        self.config = config or ResponderConfig()
        self._responders: list[Responder] = []
        self._frozen = False

    def register(self, responder: Responder) -> None:
        """
        Register a responder.

        Raises:
            RuntimeError: If the registry has been frozen
            ValueError: If a responder with the same name is registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register responders after the registry is frozen")
        if responder.name in self.names():
            raise ValueError(f"Responder already registered: {responder.name}")
        self._responders.append(responder)
        logger.info(f"Registered responder: {responder.name}")

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def responders(self) -> tuple[Responder, ...]:
        return tuple(self._responders)

    def names(self) -> list[str]:
        return [responder.name for responder in self._responders]

    def __len__(self) -> int:
        return len(self._responders)

    def __iter__(self) -> Iterator[Responder]:
        return iter(self.responders)

    def find(self, message: str) -> list[Responder]:
        """Return every responder that claims the message, in registration order."""
        found = []
        for responder in self._responders:
            try:
                if responder.matches(message):
                    found.append(responder)
            except Exception as e:
                logger.error(f"Responder {responder.name} failed to match message: {e}", exc_info=True)
        return found

    def dispatch(self, message: str, sink: TaggedSink) -> int:
        """
        Run every matching responder on the message.

        Args:
            message: Raw chat message
            sink: Receives (responder name, fragment) for each fragment

        Returns:
            Number of responders that matched
        """
        matched = self.find(message)
        for responder in matched:
            self._run(responder, message, sink)
        return len(matched)

    def dispatch_first(self, message: str, sink: TaggedSink) -> bool:
        """Run only the first matching responder. Returns True if one matched."""
        matched = self.find(message)
        if not matched:
            return False
        self._run(matched[0], message, sink)
        return True

    def help(self) -> str:
        """Aggregate help text of every registered responder."""
        return "\n\n".join(responder.help() for responder in self._responders)

    def help_fragments(self) -> list[TextResponse]:
        return [TextResponse(part) for part in split_into_parts(self.help(), self.config.max_fragment_length)]

    def _run(self, responder: Responder, message: str, sink: TaggedSink) -> None:
        try:
            responder.compute(message, lambda fragment: sink(responder.name, fragment))
        except Exception as e:
            logger.error(f"Responder {responder.name} failed on '{message}': {e}", exc_info=True)
            try:
                sink(responder.name, TextResponse(f"responder {responder.name} failed: {e}"))
            except Exception as sink_error:
                logger.error(f"Could not deliver failure notice for {responder.name}: {sink_error}")


def register_builtin_responders(
    registry: ResponderRegistry,
    price_source: PriceDataSource,
    config: ResponderConfig | None = None
) -> ResponderRegistry:
    """Register built-in responders with lazy imports to avoid circular imports."""
    from command.commands.ticker import TickerResponder
    from command.commands.help import HelpResponder

    config = config or registry.config
    registry.register(TickerResponder(price_source, config))
    registry.register(HelpResponder(registry, config))
    return registry
