"""Conversation feature package: entities, repositories, service, controller, router.

Users hold project-scoped conversations with an assistant. Each sent message
is answered by the project's configured LLM provider, or by an onboarding
message when no provider is configured.
"""
