from __future__ import annotations

from typing import List, Sequence, Union

from inbox_triage.models import Category, Email, EmailStatus


def filter_emails(
    emails: Sequence[Email],
    search: str = "",
    *,
    category: Union[Category, str, None] = None,
    status: Union[EmailStatus, str, None] = None,
) -> List[Email]:
    """Case-insensitive search over subject, sender and body, plus exact filters."""
    needle = (search or "").strip().lower()
    wanted_category = Category(category) if category else None
    wanted_status = EmailStatus(status) if status else None

    def matches(email: Email) -> bool:
        if needle and not any(
            needle in (value or "").lower() for value in (email.subject, email.sender, email.body)
        ):
            return False
        if wanted_category and email.category != wanted_category:
            return False
        if wanted_status and email.status != wanted_status:
            return False
        return True

    return [e for e in emails if matches(e)]
