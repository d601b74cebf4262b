"""Event routing — binds event types to handlers, one handler path per event."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from gohome.ports.inbound import EventCategory, EventType, InboundEvent
from gohome.ports.outbound import Handler


@dataclass(frozen=True)
class HearsBinding:
    patterns: Tuple[str, ...]  # lower-cased
    event_types: frozenset
    handler: Handler

    def matches(self, event: InboundEvent) -> bool:
        if event.type not in self.event_types:
            return False
        tokens = event.raw_text.split()
        return bool(tokens) and tokens[0].lower() in self.patterns


class EventRouter:
    """Holds ``on`` and ``hears`` bindings and selects handlers per event.

    A directed event matched by a ``hears`` binding goes to the first matching
    binding only. Anything else goes to the ``on`` bindings for its type.
    Bindings are not deduplicated.
    """

    def __init__(self):
        self._on: Dict[EventType, List[Handler]] = defaultdict(list)
        self._hears: List[HearsBinding] = []

    def on(self, event_type: EventType, handler: Handler) -> None:
        self._on[EventType(event_type)].append(handler)

    def hears(
        self,
        patterns: Iterable[str],
        event_types: Iterable[EventType],
        handler: Handler,
    ) -> None:
        self._hears.append(
            HearsBinding(
                patterns=tuple(p.lower() for p in patterns),
                event_types=frozenset(EventType(t) for t in event_types),
                handler=handler,
            )
        )

    def match(self, event: InboundEvent) -> Optional[HearsBinding]:
        if event.category is not EventCategory.DIRECTED_MESSAGE:
            return None
        for binding in self._hears:
            if binding.matches(event):
                return binding
        return None

    def handlers_for(self, event: InboundEvent) -> List[Handler]:
        binding = self.match(event)
        if binding is not None:
            return [binding.handler]
        return list(self._on.get(event.type, ()))

    async def dispatch(self, controller: Any, event: InboundEvent) -> int:
        """Run the handlers selected for ``event``; returns how many ran."""
        handlers = self.handlers_for(event)
        for handler in handlers:
            await handler(controller, event)
        return len(handlers)

    def binding_count(self, event_type: EventType) -> int:
        """Number of ``on`` bindings plus ``hears`` bindings covering the type."""
        event_type = EventType(event_type)
        hears = sum(1 for b in self._hears if event_type in b.event_types)
        return len(self._on.get(event_type, ())) + hears
