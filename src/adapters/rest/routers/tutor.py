"""Protected tutor endpoints: send a turn and manage conversations."""

from fastapi import APIRouter, Depends

from agent.orchestrator import AgentOrchestrator
from domain.entities import ChatMessage
from adapters.rest.dependencies import get_current_user, get_orchestrator, CurrentUser
from adapters.rest.schemas import (
    ConversationDetailOut,
    ConversationOut,
    DeletedOut,
    MessageOut,
    SendMessageBody,
    TurnOut,
)

router = APIRouter(prefix="/tutor", tags=["tutor"])


def _message_out(m: ChatMessage) -> MessageOut:
    return MessageOut(id=m.id, role=m.role, content=m.content, created_at=m.created_at)


@router.post("/messages", response_model=TurnOut)
async def send_message(
    body: SendMessageBody,
    user: CurrentUser = Depends(get_current_user),
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.send_message(
        user.user_id, body.content, body.conversation_id,
    )
    return TurnOut(
        conversation_id=result.conversation_id,
        message=_message_out(result.message),
        actions_executed=result.actions_executed,
    )


@router.get("/conversations", response_model=list[ConversationOut])
async def list_conversations(
    user: CurrentUser = Depends(get_current_user),
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
):
    summaries = await orchestrator.list_conversations(user.user_id)
    return [
        ConversationOut(
            id=s.id,
            title=s.title,
            last_message=s.last_message_preview,
            updated_at=s.updated_at,
        )
        for s in summaries
    ]


@router.get("/conversations/{conversation_id}", response_model=ConversationDetailOut)
async def get_conversation(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
):
    detail = await orchestrator.get_conversation(user.user_id, conversation_id)
    c = detail.conversation
    return ConversationDetailOut(
        id=c.id,
        title=c.title,
        created_at=c.created_at,
        updated_at=c.updated_at,
        messages=[_message_out(m) for m in detail.messages],
    )


@router.delete("/conversations/{conversation_id}", response_model=DeletedOut)
async def delete_conversation(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.delete_conversation(user.user_id, conversation_id)
