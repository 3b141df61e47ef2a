from __future__ import annotations

from typing import Optional

from inbox_triage.drafts.templates import BaseResponse
from inbox_triage.models import ThreadSummary


def professional(base: BaseResponse, signer: str) -> str:
    return (
        f"{base.greeting}.\n\n"
        f"{base.acknowledgment}. {base.action}.\n\n"
        f"{base.closing},\n{signer}"
    )


def friendly(base: BaseResponse, signer: str) -> str:
    return (
        "Hi there!\n\n"
        f"{base.greeting.lower()}. {base.acknowledgment.lower()}. {base.action.lower()}.\n\n"
        f"{base.closing.lower()}!\n{signer}"
    )


def short(base: BaseResponse, signer: str) -> str:
    # One line, no sign-off.
    return f"{base.greeting}. {base.action}. {base.closing}."


def detailed(base: BaseResponse, signer: str, context: Optional[ThreadSummary] = None) -> str:
    text = f"{base.greeting}.\n\n{base.acknowledgment}.\n\n{base.action}."

    if context and context.action_items:
        items = "\n".join(f"• {item}" for item in context.action_items)
        text += f"\n\nBased on our discussion, I'll also:\n{items}"

    text += f"\n\n{base.closing},\n{signer}"
    return text
