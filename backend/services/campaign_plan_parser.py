"""
Email sequence extraction from generated campaign plans.

Plans are markdown. The calendar lives in a section introduced by
"Phases, dates, and touchplan" and lists phases with nested emails::

    - Launch (Mar 3 - Mar 9)
      - March 3 (Monday): Announce the spring drive
      - March 6 (Thursday): Reader story spotlight

The section ends at the next paragraph or heading that starts with a
letter. Lines that do not fit the pattern are skipped, and a plan without
a calendar section yields no emails.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Optional

_CALENDAR_SECTION = re.compile(
    r"Phases, dates, and touchplan[\s\S]*?"
    r"(?=\n\n(?:#+[ \t]*)?(?:\d+\.[ \t]*)?[A-Z]|\Z)",
    re.IGNORECASE,
)
_PHASE = re.compile(r"- ([^(]+)\s*\(([^)]+)\)([\s\S]*?)(?=\n- [A-Z]|\n\n|\Z)")
_EMAIL = re.compile(r"- (\w+ \d+) \((\w+)\): ([^\n]+)")

# Characters of a planned description matched against generated emails
_DESCRIPTION_PREFIX = 30


@dataclass(frozen=True)
class PlanEmail:
    date: str
    description: str
    phase: str
    index: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_campaign_plan_emails(plan_text: str) -> list[PlanEmail]:
    """Return the planned emails in send order."""
    calendar = _CALENDAR_SECTION.search(plan_text or "")
    if calendar is None:
        return []

    emails: list[PlanEmail] = []
    for phase in _PHASE.finditer(calendar.group(0)):
        phase_name = phase.group(1).strip()
        for email in _EMAIL.finditer(phase.group(3)):
            emails.append(
                PlanEmail(
                    date=email.group(1),
                    description=email.group(3).strip(),
                    phase=phase_name,
                    index=len(emails),
                )
            )
    return emails


def _already_generated(email: PlanEmail, generated: list[str]) -> bool:
    description = email.description.lower()
    prefix = description[:_DESCRIPTION_PREFIX]
    for text in generated:
        text = text.strip().lower()
        if text and (text in description or prefix in text):
            return True
    return False


def pending_plan_emails(plan_emails: list[PlanEmail], generated: list[str]) -> list[PlanEmail]:
    """
    Planned emails that have not been written yet, in send order.

    ``generated`` holds descriptions (or titles) of emails already drafted.
    A planned email counts as done when a drafted text appears in its
    description, or its first 30 characters appear in a drafted text.
    """
    return [email for email in plan_emails if not _already_generated(email, generated)]


def next_plan_email(plan_emails: list[PlanEmail], generated: list[str]) -> Optional[PlanEmail]:
    """First planned email not yet drafted, or None once every email is covered."""
    pending = pending_plan_emails(plan_emails, generated)
    return pending[0] if pending else None


def format_next_email_suggestion(email: PlanEmail) -> str:
    return (
        f"The next email in the campaign plan is: **{email.description}** "
        f"({email.date}, {email.phase} phase). Would you like me to generate this email next?"
    )
