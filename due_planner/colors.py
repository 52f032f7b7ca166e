"""Deterministic subject -> color assignment for calendar entries."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SubjectColor:
    """A background/text/border color triple (hex)."""
    background: str
    text: str
    border: str


SUBJECT_PALETTE: tuple[SubjectColor, ...] = (
    SubjectColor("#dbeafe", "#1e3a8a", "#3b82f6"),  # blue
    SubjectColor("#dcfce7", "#14532d", "#22c55e"),  # green
    SubjectColor("#fef3c7", "#78350f", "#f59e0b"),  # amber
    SubjectColor("#fce7f3", "#831843", "#ec4899"),  # pink
    SubjectColor("#ede9fe", "#4c1d95", "#8b5cf6"),  # violet
    SubjectColor("#ffedd5", "#7c2d12", "#f97316"),  # orange
    SubjectColor("#cffafe", "#164e63", "#06b6d4"),  # cyan
    SubjectColor("#fee2e2", "#7f1d1d", "#ef4444"),  # red
    SubjectColor("#e0e7ff", "#312e81", "#6366f1"),  # indigo
    SubjectColor("#ecfccb", "#365314", "#84cc16"),  # lime
)


def subject_hash(subject: str) -> int:
    """31-multiplier rolling hash with 32-bit signed wraparound.

    Iterates UTF-16 code units so the value matches the browser-side
    implementation for any input, astral characters included.
    """
    data = subject.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def subject_color(subject: str) -> SubjectColor:
    return SUBJECT_PALETTE[abs(subject_hash(subject)) % len(SUBJECT_PALETTE)]
