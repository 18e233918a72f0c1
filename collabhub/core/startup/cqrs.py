# =============================================================================
# File: collabhub/core/startup/cqrs.py
# Description: CQRS initialization with automatic handler registration
# =============================================================================

import importlib
import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.infra.cqrs.command_bus import CommandBus
from collabhub.infra.cqrs.decorators import auto_register_all_handlers, get_registered_handlers
from collabhub.infra.cqrs.handler_dependencies import HandlerDependencies

logger = logging.getLogger("collabhub.startup.cqrs")

HANDLER_MODULES = (
    "collabhub.chat.command_handlers",
    "collabhub.notification.command_handlers",
)


def import_handler_modules() -> int:
    """Import handler packages so their decorators register."""
    for module_name in HANDLER_MODULES:
        importlib.import_module(module_name)
    return len(HANDLER_MODULES)


def build_command_bus(dependencies: HandlerDependencies) -> CommandBus:
    """Bus (logging + metrics middleware) with every decorated handler registered."""
    import_handler_modules()
    command_bus = CommandBus()
    auto_register_all_handlers(command_bus, dependencies)
    return command_bus


async def initialize_cqrs_and_handlers(app: FastAPI) -> None:
    """Create the command bus and register every decorated handler"""
    imported = import_handler_modules()
    discovered = get_registered_handlers()
    logger.info(f"Imported {imported} handler modules, discovered {discovered['command_count']} commands")

    dependencies = HandlerDependencies(
        membership=app.state.membership_authority,
        message_store=app.state.message_repo,
        reaction_ledger=app.state.reaction_repo,
        notification_store=app.state.notification_repo,
        users=app.state.user_repo,
    )

    command_bus = build_command_bus(dependencies)
    app.state.command_bus = command_bus
    app.state.cqrs_registration_stats = command_bus.get_handler_info()
    logger.info(f"Registered {app.state.cqrs_registration_stats['total_handlers']} command handlers")
