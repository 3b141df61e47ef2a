from __future__ import annotations

import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

# Importing paths loads .env before any INBOX_TRIAGE_* lookup below.
from inbox_triage.config import paths  # noqa: F401
from inbox_triage.models import SummaryLength, Tone


@dataclass(frozen=True)
class TriageSettings:
    # Mirrors the user preferences panel of the inbox UI.
    auto_reply: bool = True
    auto_categorize: bool = True
    confidence_threshold: int = 75
    default_tone: Tone = Tone.PROFESSIONAL
    summary_length: SummaryLength = SummaryLength.BULLETS
    signer_name: str = "Your Name"
    # Seed for the confidence jitter; None means ambient randomness.
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 <= self.confidence_threshold <= 100:
            raise ValueError(
                f"confidence_threshold must be within 0-100, got {self.confidence_threshold}"
            )
        # Accept plain strings from env/JSON and normalize to enums.
        object.__setattr__(self, "default_tone", Tone(self.default_tone))
        object.__setattr__(self, "summary_length", SummaryLength(self.summary_length))

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["default_tone"] = self.default_tone.value
        data["summary_length"] = self.summary_length.value
        return data


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


def load_settings() -> TriageSettings:
    """Build settings from INBOX_TRIAGE_* environment variables."""
    defaults = TriageSettings()
    return TriageSettings(
        auto_reply=_env_bool("INBOX_TRIAGE_AUTO_REPLY", defaults.auto_reply),
        auto_categorize=_env_bool("INBOX_TRIAGE_AUTO_CATEGORIZE", defaults.auto_categorize),
        confidence_threshold=_env_int(
            "INBOX_TRIAGE_CONFIDENCE_THRESHOLD", defaults.confidence_threshold
        ),
        default_tone=os.getenv("INBOX_TRIAGE_DEFAULT_TONE") or defaults.default_tone,
        summary_length=os.getenv("INBOX_TRIAGE_SUMMARY_LENGTH") or defaults.summary_length,
        signer_name=os.getenv("INBOX_TRIAGE_SIGNER_NAME") or defaults.signer_name,
        seed=_env_int("INBOX_TRIAGE_SEED", None),
    )
