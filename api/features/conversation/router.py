"""Router for the Conversation feature.

Mounted under ``/api/v1/projects/{project_id}/conversations``.
"""
from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from di.container import ApplicationContainer as DependencyContainer
from api.features.conversation.controller import ConversationController
from api.features.conversation.dtos import (
    ConversationDTO,
    ConversationDetailDTO,
    ConversationSummaryDTO,
    SendMessageRequest,
    SendMessageResponse,
)
from api.shared.auth import CurrentUser, get_current_user
from api.shared.db import get_db_session
from api.shared.response import ResponseModel

router = APIRouter()


@router.get("", response_model=ResponseModel[List[ConversationSummaryDTO]])
@inject
async def list_conversations(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """List the caller's conversations in a project, most recently updated first."""
    items = await controller.list_conversations(
        project_id=project_id, user_id=current_user.user_id, db_session=db_session
    )
    return ResponseModel.success(data=items, message="Conversations listed")


@router.post("", response_model=ResponseModel[ConversationDTO])
@inject
async def create_conversation(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    conversation = await controller.create_conversation(
        project_id=project_id, user_id=current_user.user_id, db_session=db_session
    )
    return ResponseModel.success(data=conversation, message="Conversation created")


@router.get("/{conversation_id}", response_model=ResponseModel[ConversationDetailDTO])
@inject
async def get_conversation(
    project_id: str,
    conversation_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Get a conversation with its full message history."""
    conversation = await controller.get_conversation(
        project_id=project_id,
        conversation_id=conversation_id,
        user_id=current_user.user_id,
        db_session=db_session,
    )
    return ResponseModel.success(data=conversation, message="Conversation fetched")


@router.post(
    "/{conversation_id}/messages", response_model=ResponseModel[SendMessageResponse]
)
@inject
async def send_message(
    project_id: str,
    conversation_id: str,
    request: SendMessageRequest,
    current_user: CurrentUser = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Send a message and receive the assistant's reply."""
    result = await controller.send_message(
        project_id=project_id,
        conversation_id=conversation_id,
        user_id=current_user.user_id,
        request=request,
        db_session=db_session,
    )
    return ResponseModel.success(data=result, message="Message sent")
