from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, model_validator

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class EventData(BaseModel):
    object: Dict[str, Any] = Field(default_factory=dict)


class WebhookEvent(BaseModel):
    """verified payment-provider event envelope."""

    id: Optional[str] = None
    type: str = Field(..., min_length=1)
    data: EventData

    class Config:
        extra = "ignore"

    @model_validator(mode="after")
    def _session_id_present(self):
        if self.type == CHECKOUT_SESSION_COMPLETED and not self.session_id:
            raise ValueError("checkout.session.completed event without data.object.id")
        return self

    @property
    def session_id(self) -> Optional[str]:
        sid = self.data.object.get("id")
        return sid if isinstance(sid, str) and sid else None
