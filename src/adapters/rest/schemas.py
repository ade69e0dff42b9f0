"""Pydantic models for REST API request/response validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# --- Turns ---

class SendMessageBody(BaseModel):
    content: str = Field(..., min_length=1, max_length=4000)
    conversation_id: Optional[str] = None


class MessageOut(BaseModel):
    id: int | None
    role: str
    content: str
    created_at: str


class TurnOut(BaseModel):
    conversation_id: str
    message: MessageOut
    actions_executed: int


# --- Conversations ---

class ConversationOut(BaseModel):
    id: str
    title: str
    last_message: Optional[str]
    updated_at: str


class ConversationDetailOut(BaseModel):
    id: str
    title: str
    created_at: str
    updated_at: str
    messages: list[MessageOut]


class DeletedOut(BaseModel):
    message: str
