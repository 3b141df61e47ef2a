from __future__ import annotations

import pytest

from conftest import StubNoise, make_email
from inbox_triage.drafts.responses import as_reply_subject, draft_response, generate_response
from inbox_triage.drafts.templates import select_template
from inbox_triage.models import ThreadSummary, Tone


def _summary(text: str = "the Q3 budget", actions=()) -> ThreadSummary:
    return ThreadSummary(
        summary=text,
        context=None,
        action_items=tuple(actions),
        confidence=80.0,
        compression_ratio=40,
    )


@pytest.mark.parametrize(
    "subject, template",
    [
        ("Meeting on Monday", "meeting"),
        ("Can we schedule a call", "meeting"),
        ("Follow-up on invoice", "follow-up"),
        ("Project update", "follow-up"),
        ("Thanks a lot", "thank-you"),
        ("Quarterly numbers", "generic"),
        ("", "generic"),
    ],
)
def test_template_selection_by_subject(subject: str, template: str) -> None:
    assert select_template(subject).name == template


def test_meeting_wins_over_follow_up() -> None:
    assert select_template("Follow up: meeting notes").name == "meeting"


def test_professional_meeting_reply_uses_context() -> None:
    email = make_email(subject="Meeting next week")

    body = generate_response(email, Tone.PROFESSIONAL, _summary(), signer="Dana")

    assert body == (
        "Thank you for reaching out about scheduling.\n\n"
        "I've reviewed the Q3 budget. I would be happy to coordinate a time that works for everyone.\n\n"
        "Looking forward to your response,\nDana"
    )


def test_meeting_reply_without_context() -> None:
    body = generate_response(make_email(subject="meeting"), "professional")
    assert "I've reviewed your message." in body
    assert body.endswith("Looking forward to your response,\nYour Name")


def test_follow_up_interpolates_summary() -> None:
    body = generate_response(make_email(subject="Follow up"), "professional", _summary("the invoice"))
    assert "I appreciate you checking in on the invoice." in body


def test_friendly_is_lowercased() -> None:
    body = generate_response(make_email(subject="Random"), Tone.FRIENDLY, signer="Dana")
    assert body == (
        "Hi there!\n\n"
        "thank you for your message. i have reviewed your email. i will follow up as appropriate.\n\n"
        "best regards!\nDana"
    )


def test_short_has_no_signature() -> None:
    body = generate_response(make_email(subject="Thanks!"), Tone.SHORT, signer="Dana")
    assert body == "You are very welcome. Please let me know if you need anything else. Best regards."


def test_detailed_lists_action_items() -> None:
    context = _summary(actions=["Send the deck", "Book a room"])

    body = generate_response(make_email(subject="Random"), Tone.DETAILED, context, signer="Dana")

    assert "Based on our discussion, I'll also:\n• Send the deck\n• Book a room" in body
    assert body.endswith("Best regards,\nDana")


def test_detailed_without_action_items() -> None:
    body = generate_response(make_email(subject="Random"), Tone.DETAILED, _summary(), signer="Dana")
    assert "Based on our discussion" not in body


def test_unknown_tone_renders_professional() -> None:
    email = make_email(subject="Random")
    assert generate_response(email, "pirate") == generate_response(email, Tone.PROFESSIONAL)


def test_draft_has_alternatives_in_other_tones() -> None:
    noise = StubNoise(fraction=0.5)
    email = make_email(subject="Meeting tomorrow")
    context = _summary()

    draft = draft_response(email, Tone.FRIENDLY, context, noise=noise, signer="Dana")

    assert draft.tone == Tone.FRIENDLY
    assert draft.template == "meeting"
    assert draft.subject == "Re: Meeting tomorrow"
    assert draft.context == "the Q3 budget"
    assert [alt.tone for alt in draft.alternatives] == [Tone.PROFESSIONAL, Tone.SHORT, Tone.DETAILED]
    for alt in draft.alternatives:
        assert alt.body == generate_response(email, alt.tone, context, signer="Dana")
        assert alt.confidence == 87.5
    assert noise.calls == [(80.0, 95.0)] * 3 + [(80.0, 100.0)]
    assert draft.confidence == 90.0


def test_draft_without_context() -> None:
    draft = draft_response(make_email(subject="Hi"), None, noise=StubNoise())
    assert draft.tone == Tone.PROFESSIONAL
    assert draft.context is None
    assert draft.confidence == 80.0


@pytest.mark.parametrize(
    "subject, expected",
    [
        ("Quick question", "Re: Quick question"),
        ("RE: Quick question", "Re: Quick question"),
        ("aw:  Termin", "Re: Termin"),
        ("   ", "Re: (no subject)"),
        ("Re:", "Re: (no subject)"),
    ],
)
def test_reply_subject(subject: str, expected: str) -> None:
    assert as_reply_subject(subject) == expected
