"""Event handler methods."""

from pagewright.core import ValidationReport, get_logger
from pagewright.markup.bindings import event_handler_name
from pagewright.models import ComponentNode, CustomEvent, walk_tree

from .actions import translate_actions
from .formatter import quote_string
from .identifiers import is_usable_name
from .lifecycle import render_method

logger = get_logger(__name__)

DEFAULT_PARAMS = ["e"]


def collect_component_handlers(nodes: list[ComponentNode]) -> list[CustomEvent]:
    """
    One handler per distinct name bound in the tree, in pre-order.

    Handler names match the markup's event attributes. When several events
    share a name, the first declaration supplies the body.
    """
    handlers: dict[str, CustomEvent] = {}
    for node in walk_tree(nodes):
        for event in node.events:
            name = event_handler_name(node.id, event.name, event.handler)
            if name in handlers:
                continue
            handlers[name] = CustomEvent(name=name, params=list(DEFAULT_PARAMS), actions=list(event.actions))
    return list(handlers.values())


def merge_handlers(custom: list[CustomEvent], component: list[CustomEvent]) -> list[CustomEvent]:
    """Custom events first; component handlers that a custom event already defines are dropped."""
    declared = {event.name for event in custom}
    merged = list(custom)
    for handler in component:
        if handler.name in declared:
            logger.debug("component_handler_overridden", handler=handler.name)
            continue
        merged.append(handler)
    return merged


def validate_handlers(custom: list[CustomEvent], component: list[CustomEvent]) -> ValidationReport:
    report = ValidationReport()
    seen: set[str] = set()
    for event in custom:
        path = f"events.{event.name}"
        if not is_usable_name(event.name):
            report.error("INVALID_HANDLER_NAME", f"Invalid event handler name: {event.name!r}", path)
        if event.name in seen:
            report.error("DUPLICATE_HANDLER", f"Event handler declared more than once: {event.name}", path)
        seen.add(event.name)
        for param in event.params:
            if not is_usable_name(param):
                report.error("INVALID_PARAMETER", f"Invalid parameter name in {event.name}: {param!r}", path)
    for handler in component:
        if not is_usable_name(handler.name):
            report.error(
                "INVALID_HANDLER_NAME",
                f"Component event produces an invalid handler name: {handler.name!r}",
                f"events.{handler.name}",
            )
    return report


def _params(event: CustomEvent) -> list[str]:
    return event.params or list(DEFAULT_PARAMS)


def _body(event: CustomEvent) -> list[str]:
    statements = translate_actions(event.actions)
    if statements:
        return statements
    args = [quote_string(event.name), *_params(event)[:1]]
    return [f"console.log({', '.join(args)})"]


def generate_event_handlers(events: list[CustomEvent]) -> str:
    """Render one method per event; a handler without actions logs its invocation."""
    return ",\n\n".join(render_method(event.name, _params(event), _body(event)) for event in events)


__all__ = [
    "collect_component_handlers",
    "merge_handlers",
    "validate_handlers",
    "generate_event_handlers",
]
