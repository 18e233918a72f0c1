# collabhub/infra/cqrs/decorators.py
"""
Auto-registration decorators for command handlers
"""
import logging
from typing import Type, Dict, Any, List

log = logging.getLogger("collabhub.cqrs.decorators")

# Global registry: command type -> handler class
_COMMAND_HANDLERS: Dict[Type, Type] = {}


def command_handler(command_type: Type):
    """
    Decorator for command handler auto-registration

    Usage:
        @command_handler(SendMessageCommand)
        class SendMessageHandler(ICommandHandler):
            def __init__(self, deps):
                self.messages = deps.message_store

            async def handle(self, command: SendMessageCommand):
                ...
    """

    def decorator(handler_class: Type):
        existing_handler = _COMMAND_HANDLERS.get(command_type)
        if existing_handler is not None and existing_handler is not handler_class:
            raise ValueError(
                f"Duplicate command handler: {command_type.__name__} already handled by "
                f"{existing_handler.__name__} in {existing_handler.__module__}"
            )

        _COMMAND_HANDLERS[command_type] = handler_class
        handler_class._command_type = command_type

        log.debug(
            f"Auto-registered command handler: {handler_class.__name__} "
            f"for {command_type.__name__} in {handler_class.__module__}"
        )
        return handler_class

    return decorator


def auto_register_all_handlers(command_bus, dependencies) -> Dict[str, Any]:
    """
    Register every decorated handler with the bus.

    Handlers are instantiated lazily by the bus through a factory that
    captures the shared HandlerDependencies.

    Returns:
        Statistics about registered handlers
    """
    registered: List[str] = []

    for command_type, handler_class in _COMMAND_HANDLERS.items():
        def make_factory(h_class, deps):
            def factory():
                return h_class(deps)

            return factory

        command_bus.register_handler(command_type, make_factory(handler_class, dependencies))
        registered.append(handler_class.__name__)
        log.debug(f"Registered {handler_class.__name__} for {command_type.__name__}")

    log.info(f"Auto-registration complete: {len(registered)} command handlers")
    return {'commands': len(registered), 'handlers': registered}


def get_registered_handlers() -> Dict[str, Any]:
    """Get information about all registered handlers"""
    return {
        'commands': [
            {
                'command': cmd_type.__name__,
                'handler': handler_class.__name__,
                'module': handler_class.__module__,
            }
            for cmd_type, handler_class in _COMMAND_HANDLERS.items()
        ],
        'command_count': len(_COMMAND_HANDLERS),
    }
