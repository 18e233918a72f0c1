# =============================================================================
# File: collabhub/infra/cqrs/command_bus.py
# Description: Command Bus with middleware pipeline and type-based routing
# =============================================================================

import logging
from abc import ABC, abstractmethod
from typing import Dict, Type, Any, List, Callable, Awaitable

from pydantic import BaseModel

from collabhub.common.exceptions.exceptions import AuthorizationError, ValidationError, NotFoundError
from collabhub.infra.metrics.realtime_metrics import command_counter, command_latency

log = logging.getLogger("collabhub.cqrs.command")

# Expected outcomes of a command that are answered to the caller, not incidents
_EXPECTED_FAILURES = (AuthorizationError, ValidationError, NotFoundError)


# =============================================================================
# Base Classes
# =============================================================================

class Command(BaseModel):
    """Base class for all commands"""
    pass


class ICommandHandler(ABC):
    """Base class for all command handlers"""

    @abstractmethod
    async def handle(self, command: Command) -> Any:
        """Handle the command and return result"""
        pass


# =============================================================================
# Middleware Support
# =============================================================================

class Middleware(ABC):
    """Base middleware class for commands"""

    @abstractmethod
    async def process(
            self,
            message: Any,
            next_handler: Callable[[Any], Awaitable[Any]]
    ) -> Any:
        """Process message and call next handler"""
        pass


class LoggingMiddleware(Middleware):
    """Logs every command; authorization/validation rejections are logged at INFO"""

    async def process(self, message: Any, next_handler: Callable) -> Any:
        message_type = type(message).__name__
        log.debug(f"Processing command {message_type}")

        try:
            result = await next_handler(message)
            log.debug(f"Successfully processed command {message_type}")
            return result
        except _EXPECTED_FAILURES as e:
            log.info(f"Command {message_type} rejected: {e}")
            raise
        except Exception as e:
            log.error(f"Failed to process command {message_type}: {e}")
            raise


class MetricsMiddleware(Middleware):
    """Tracks command execution counts locally and in Prometheus"""

    def __init__(self):
        self.command_counts: Dict[str, int] = {}
        self.command_errors: Dict[str, int] = {}

    async def process(self, message: Any, next_handler: Callable) -> Any:
        command_name = type(message).__name__
        self.command_counts[command_name] = self.command_counts.get(command_name, 0) + 1

        with command_latency.labels(command=command_name).time():
            try:
                result = await next_handler(message)
            except Exception:
                self.command_errors[command_name] = self.command_errors.get(command_name, 0) + 1
                command_counter.labels(command=command_name, outcome="error").inc()
                raise

        command_counter.labels(command=command_name, outcome="ok").inc()
        return result

    def get_metrics(self) -> Dict[str, Any]:
        """Get command execution metrics"""
        return {
            "command_counts": self.command_counts.copy(),
            "command_errors": self.command_errors.copy(),
            "total_commands": sum(self.command_counts.values()),
            "total_errors": sum(self.command_errors.values())
        }


# =============================================================================
# Command Bus
# =============================================================================

class CommandBus:
    """
    Command Bus with middleware pipeline.
    Each command type has exactly one handler, created lazily from its factory.
    """

    def __init__(self):
        self._handlers: Dict[Type[Command], ICommandHandler] = {}
        self._handler_factories: Dict[Type[Command], Callable[[], ICommandHandler]] = {}
        self._middleware: List[Middleware] = []

        self._metrics_middleware = MetricsMiddleware()

        self.use(LoggingMiddleware())
        self.use(self._metrics_middleware)

    def use(self, middleware: Middleware) -> 'CommandBus':
        """Add middleware to the pipeline"""
        self._middleware.append(middleware)
        return self

    def register_handler(
            self,
            command_type: Type[Command],
            handler_factory: Callable[[], ICommandHandler]
    ) -> None:
        """
        Register a handler factory for a command type.
        Raises ValueError if a different handler is already registered.
        """
        existing_factory = self._handler_factories.get(command_type)
        if existing_factory is not None and existing_factory != handler_factory:
            raise ValueError(
                f"Duplicate command handler: '{command_type.__name__}' already has a registered handler. "
                f"Existing: {existing_factory}, Attempted: {handler_factory}"
            )

        self._handler_factories[command_type] = handler_factory
        self._handlers.pop(command_type, None)
        log.debug(f"Registered handler for {command_type.__name__}")

    async def send(self, command: Command) -> Any:
        """
        Send a command through the middleware pipeline to its handler.
        This is the main entry point for command execution.
        """
        handler = self._build_handler_chain(command)
        return await handler(command)

    def _build_handler_chain(self, command: Command) -> Callable:
        """Build the middleware chain ending with the actual handler"""
        command_type = type(command)

        if command_type not in self._handlers:
            factory = self._handler_factories.get(command_type)
            if not factory:
                registered = sorted(t.__name__ for t in self._handler_factories)
                raise ValueError(
                    f"No handler registered for {command_type.__name__}. "
                    f"Registered handlers: {registered}"
                )
            self._handlers[command_type] = factory()

        final_handler = self._handlers[command_type]

        async def handler_wrapper(cmd):
            return await final_handler.handle(cmd)

        chain = handler_wrapper

        # Wrap with middleware in reverse order
        for middleware in reversed(self._middleware):
            current_chain = chain

            async def wrapped(cmd, mw=middleware, next_h=current_chain):
                return await mw.process(cmd, next_h)

            chain = wrapped

        return chain

    def get_metrics(self) -> Dict[str, Any]:
        """Get command execution metrics"""
        return self._metrics_middleware.get_metrics()

    def get_handler_info(self) -> Dict[str, Any]:
        """Get information about registered handlers"""
        return {
            "handlers": sorted(h.__name__ for h in self._handler_factories),
            "total_handlers": len(self._handler_factories),
            "middleware_count": len(self._middleware)
        }
