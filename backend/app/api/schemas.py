from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from inbox_triage.config.settings import TriageSettings
from inbox_triage.models import SummaryLength, Tone


class MessagePayload(BaseModel):
    sender: str = ""
    content: str = ""
    timestamp: Optional[str] = None


class EmailPayload(BaseModel):
    # Optional here so a missing field surfaces as MalformedEmail (400), not a 422.
    id: Optional[str] = None
    sender: Optional[str] = None
    sender_name: str = ""
    subject: Optional[str] = None
    body: Optional[str] = None
    timestamp: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    thread: List[MessagePayload] = Field(default_factory=list)
    attachments: int = 0

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SettingsPayload(BaseModel):
    auto_reply: bool = True
    auto_categorize: bool = True
    confidence_threshold: int = Field(75, ge=0, le=100)
    default_tone: Tone = Tone.PROFESSIONAL
    summary_length: SummaryLength = SummaryLength.BULLETS
    signer_name: str = "Your Name"
    seed: Optional[int] = None

    def to_settings(self) -> TriageSettings:
        return TriageSettings(**self.model_dump())


class CategorizeRequest(BaseModel):
    email: EmailPayload
    settings: Optional[SettingsPayload] = None


class SummarizeRequest(BaseModel):
    content: str
    summary_length: SummaryLength = SummaryLength.BULLETS
    preserve_context: bool = True
    extract_action_items: bool = True
    seed: Optional[int] = None


class RespondRequest(BaseModel):
    email: EmailPayload
    tone: Optional[Tone] = None
    include_context: bool = True
    settings: Optional[SettingsPayload] = None


class AnalyzeRequest(BaseModel):
    email: EmailPayload
    tone: Optional[Tone] = None
    settings: Optional[SettingsPayload] = None


class RunRequest(BaseModel):
    emails: List[Dict[str, Any]]
    settings: Optional[SettingsPayload] = None
