from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

SentimentLabel = Literal["positive", "neutral", "negative"]
CacheCategory = Literal["schedule", "bus", "cafeteria", "event", "faq"]
LanguageCode = Literal["en", "si", "ta"]


class Message(BaseModel):
    text: str
    is_user: bool = Field(serialization_alias="isUser")
    timestamp: datetime = Field(default_factory=datetime.now)
    sentiment: SentimentLabel = "neutral"
    is_tampered: bool = Field(default=False, serialization_alias="isTampered")

    # Immutable once classified
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SentimentRequest(BaseModel):
    text: str = ""

    model_config = ConfigDict(extra="ignore")


class SentimentResponse(BaseModel):
    text: str
    label: SentimentLabel
    score: float


class TamperCheckRequest(BaseModel):
    data_type: str = Field(validation_alias=AliasChoices("data_type", "dataType", "type"))
    payload: Any = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TamperCheckResponse(BaseModel):
    data_type: str
    tampered: bool
    checked: bool
    reason: Optional[str] = None


class ConnectivityEvent(BaseModel):
    online: bool = Field(validation_alias=AliasChoices("online", "isOnline"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AwardRequest(BaseModel):
    points: int

    model_config = ConfigDict(extra="ignore")

    @field_validator("points")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("points must be non-negative")
        return value


class ChatRequest(BaseModel):
    message: str = Field(validation_alias=AliasChoices("message", "text"))
    # Detected from the message script when omitted
    language: Optional[LanguageCode] = Field(default=None, validation_alias=AliasChoices("language", "lang"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not str(value or "").strip():
            raise ValueError("message must not be empty")
        return value


class ChatResponse(BaseModel):
    user_message: Dict[str, Any]
    reply: Dict[str, Any]
    intent: str
    language: LanguageCode = "en"
    suggestions: List[str] = []
    gamification: Dict[str, Any]
    connectivity: Dict[str, Any]
