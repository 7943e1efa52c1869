"""Centralized dependency injection container."""
from __future__ import annotations

import structlog
from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.encryption import SecretCipher
from infra.llm.completion import LLMCompletionClient
from infra.resources import DatabaseResource


logger = structlog.get_logger("assistant")


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies."""

    config = providers.Configuration()
    settings = providers.Object(SETTINGS)
    logger = providers.Object(logger)

    # Database
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
    )

    # Provider secrets
    cipher = providers.Singleton(
        SecretCipher,
        key_hex=SETTINGS.ENCRYPTION.ENCRYPTION_KEY.get_secret_value(),
    )

    # External completion calls
    completion_client = providers.Singleton(LLMCompletionClient)


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    conversation_service = providers.Factory(
        "api.features.conversation.service.ConversationService",
        completion_client=infrastructure.completion_client,
        cipher=infrastructure.cipher,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    conversation_controller = providers.Factory(
        "api.features.conversation.controller.ConversationController",
        conversation_service=services.conversation_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.conversation.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
