"""
Status classification for monitored groups.

The status and summary texts are written by an external analysis process
in free-form Portuguese, so classification is keyword based: an ordered
table of rules is evaluated and the first rule whose keyword appears in
its field wins. Rules over `status` come before rules over `summary`,
and anything non-blank that matches nothing is considered stable.
"""
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class StatusCategory(str, Enum):
    STABLE = "stable"
    WARNING = "warning"
    CRITICAL = "critical"
    NO_MESSAGES = "no-messages"


class StatusFilter(str, Enum):
    ALL = "all"
    STABLE = "stable"
    WARNING = "warning"
    CRITICAL = "critical"
    NO_MESSAGES = "no-messages"


NO_MESSAGES_KEYWORDS = ("sem mensagens", "sem mensagem")
CRITICAL_KEYWORDS = ("crítico", "critico", "problema", "erro")
WARNING_KEYWORDS = ("alerta", "warning", "pendência", "pendencia", "dificuldade", "aguardando")
STABLE_KEYWORDS = ("estável", "estavel", "ativo", "ok", "positivo", "bom", "satisfatório", "aprovado")
SUMMARY_STABLE_KEYWORDS = STABLE_KEYWORDS + ("cordial", "colaborativo", "produtivo", "tranquilo")


class Rule(NamedTuple):
    field: str  # "status" | "summary"
    category: StatusCategory
    keywords: Tuple[str, ...]


RULES: Tuple[Rule, ...] = (
    Rule("status", StatusCategory.NO_MESSAGES, NO_MESSAGES_KEYWORDS),
    Rule("status", StatusCategory.CRITICAL, CRITICAL_KEYWORDS),
    Rule("status", StatusCategory.WARNING, WARNING_KEYWORDS),
    Rule("status", StatusCategory.STABLE, STABLE_KEYWORDS),
    Rule("summary", StatusCategory.NO_MESSAGES, NO_MESSAGES_KEYWORDS),
    Rule("summary", StatusCategory.CRITICAL, CRITICAL_KEYWORDS),
    Rule("summary", StatusCategory.WARNING, WARNING_KEYWORDS),
    Rule("summary", StatusCategory.STABLE, SUMMARY_STABLE_KEYWORDS),
)


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def classify(
    status: Optional[str],
    summary: Optional[str],
    message_count: Optional[int] = None,
) -> StatusCategory:
    """Map a (status, summary, message count) triple to a StatusCategory.

    Total and deterministic: never raises, always returns a category.
    `message_count` may be None when the count is unknown.
    """
    fields = {"status": _normalize(status), "summary": _normalize(summary)}

    if message_count == 0 and not fields["status"] and not fields["summary"]:
        return StatusCategory.NO_MESSAGES
    if not fields["status"] and not fields["summary"]:
        return StatusCategory.NO_MESSAGES

    for rule in RULES:
        text = fields[rule.field]
        if text and any(keyword in text for keyword in rule.keywords):
            return rule.category

    return StatusCategory.STABLE


def matches_filter(category: StatusCategory, status_filter: StatusFilter) -> bool:
    return status_filter == StatusFilter.ALL or category.value == status_filter.value
