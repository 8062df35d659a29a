"""Chat session shape consumed by the share operations.

Only the fields sharing needs are modelled; the chat client owns the real
session object and can pass anything with the same attributes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import new_id

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_SYSTEM = "system"


@dataclass
class ChatMessage:
    """A single message in a conversation."""

    role: str  # "user", "assistant", "system"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        return cls(role=str(data.get("role", ROLE_USER)), content=str(data.get("content") or ""))


@dataclass
class ChatSession:
    """A conversation to be shared.

    Attributes:
        id: Session id, used as the issue label when publishing
        topic: Conversation title
        messages: Messages in order
        model: Model the conversation was held with
        endpoint_id: Endpoint the conversation was held against, if known
    """

    id: str = field(default_factory=new_id)
    topic: str = ""
    messages: List[ChatMessage] = field(default_factory=list)
    model: str = ""
    endpoint_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "messages": [m.to_dict() for m in self.messages],
            "model": self.model,
            "endpointId": self.endpoint_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatSession":
        return cls(
            id=str(data.get("id") or new_id()),
            topic=str(data.get("topic") or ""),
            messages=[ChatMessage.from_dict(m) for m in data.get("messages") or [] if isinstance(m, dict)],
            model=str(data.get("model") or ""),
            endpoint_id=data.get("endpointId"),
        )
