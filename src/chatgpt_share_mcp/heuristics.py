"""Best-effort message mining from React Router script payloads.

Share pages without ``__NEXT_DATA__`` only carry the conversation as string
literals buried in a client-side state dump. Newlines inside those literals are
double escaped (``\\\\n`` in the script source), so every pattern below works on
the escaped form and decodes it before storing a candidate.

Strategies run in a fixed order against one ``MessageAccumulator``; later
strategies consult what earlier ones accepted, so the order changes results.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from . import config
from .models import Candidate, Role

logger = logging.getLogger(__name__)

CJK_RUN_RE = re.compile(f"[{config.CJK_CHARS}]{{{config.MIN_CJK_RUN},}}")
PARAGRAPH_RE = re.compile(f'[{config.CJK_CHARS}][^"]*?' + r"\\\\n\\\\n")
HEADING_SECTION_RE = re.compile(r'##[^"]{50,1000}')
LINE_SENTENCE_RE = re.compile(f'[{config.CJK_CHARS}][^"]*?[。！？][^"]*?' + r"\\\\n")
PUNCT_SENTENCE_RE = re.compile(r'[。！？][^"]*?[。！？]')
FALLBACK_RE = re.compile(f'[{config.CJK_CHARS}][^"]{{20,300}}')

_TRAILING_BREAK_RE = re.compile(r"\\\\n\\\\n$")
_ESCAPED_NEWLINE_RE = re.compile(r"\\\\n")
_ESCAPED_TAB_RE = re.compile(r"\\\\t")


def has_cjk_run(text: str) -> bool:
    """True if ``text`` holds a run of MIN_CJK_RUN or more CJK characters."""
    return CJK_RUN_RE.search(text) is not None


def unescape(fragment: str) -> str:
    """Decode escaped newlines and tabs and trim surrounding whitespace."""
    fragment = _ESCAPED_NEWLINE_RE.sub("\n", fragment)
    fragment = _ESCAPED_TAB_RE.sub("\t", fragment)
    return fragment.strip()


def clean_block(fragment: str) -> str:
    """Drop the paragraph terminator, then unescape."""
    return unescape(_TRAILING_BREAK_RE.sub("", fragment))


class MessageAccumulator:
    """Ordered list of accepted candidates shared by every strategy."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.messages: list[Candidate] = []
        self.log = log or logger

    def __len__(self) -> int:
        return len(self.messages)

    def add(self, role: Role, content: str) -> None:
        self.messages.append(Candidate(role=role, content=content))

    def overlaps_accepted(self, text: str, prefix: int) -> bool:
        """True if an accepted message's first ``prefix`` chars occur in ``text``.

        Messages no longer than ``prefix`` never suppress anything.
        """
        return any(
            len(msg.content) > prefix and msg.content[:prefix] in text
            for msg in self.messages
        )

    def already_contains(self, text: str, prefix: int) -> bool:
        """True if the first ``prefix`` chars of ``text`` occur in an accepted message."""
        head = text[:prefix]
        return any(head in msg.content for msg in self.messages)


def classify_paragraph(paragraph: str) -> Role:
    if config.QUESTION_MARK in paragraph and any(
        ending in paragraph for ending in config.POLITE_ENDINGS
    ):
        return Role.USER
    return Role.ASSISTANT


def classify_sentence(sentence: str) -> Role:
    if any(marker in sentence for marker in config.REQUEST_MARKERS):
        return Role.USER
    return Role.ASSISTANT


def mine_known_prompts(script: str, acc: MessageAccumulator) -> None:
    for prompt in config.KNOWN_USER_PROMPTS:
        if prompt in script:
            acc.add(Role.USER, prompt)


def mine_labeled_sections(script: str, acc: MessageAccumulator) -> None:
    for pattern in config.LABELED_SECTION_PATTERNS:
        match = re.search(pattern, script)
        if match:
            acc.add(Role.ASSISTANT, clean_block(match.group(0)))


def mine_paragraphs(script: str, acc: MessageAccumulator) -> None:
    blocks = PARAGRAPH_RE.findall(script)
    if not blocks:
        return
    acc.log.info("Found %d total paragraph blocks", len(blocks))

    paragraphs = [clean_block(block) for block in blocks]
    paragraphs = [p for p in paragraphs if len(p) > config.MIN_PARAGRAPH_LENGTH]
    for paragraph in paragraphs[: config.MAX_PARAGRAPHS]:
        if acc.overlaps_accepted(paragraph, config.PARAGRAPH_DEDUP_PREFIX):
            continue
        acc.add(classify_paragraph(paragraph), paragraph)


def mine_heading_sections(script: str, acc: MessageAccumulator) -> None:
    sections = HEADING_SECTION_RE.findall(script)
    if not sections:
        return
    acc.log.info("Found %d technical sections", len(sections))

    for section in sections:
        cleaned = unescape(section)
        if len(cleaned) > config.MIN_SECTION_LENGTH:
            acc.add(Role.ASSISTANT, cleaned)


def mine_keyword_windows(script: str, acc: MessageAccumulator) -> None:
    for keyword in config.TECHNICAL_KEYWORDS:
        window_re = re.compile(f'[^"]*{re.escape(keyword)}[^"]{{50,800}}')
        for match in window_re.findall(script):
            cleaned = unescape(match)
            if len(cleaned) <= config.MIN_KEYWORD_WINDOW_LENGTH:
                continue
            if acc.already_contains(cleaned, config.KEYWORD_DEDUP_PREFIX):
                continue
            acc.add(Role.ASSISTANT, cleaned)


def mine_line_sentences(script: str, acc: MessageAccumulator) -> None:
    sentences = LINE_SENTENCE_RE.findall(script)
    if not sentences:
        return
    acc.log.info("Found %d complete sentences", len(sentences))

    sentences = [s for s in sentences if len(s) > config.MIN_LINE_SENTENCE_LENGTH]
    for sentence in sentences[: config.MAX_SENTENCES]:
        cleaned = unescape(sentence)
        if len(cleaned) <= config.MIN_LINE_SENTENCE_LENGTH:
            continue
        if acc.already_contains(cleaned, config.LINE_SENTENCE_DEDUP_PREFIX):
            continue
        acc.add(classify_sentence(cleaned), cleaned)


def mine_punctuated_sentences(script: str, acc: MessageAccumulator) -> None:
    sentences = PUNCT_SENTENCE_RE.findall(script)
    if not sentences:
        return
    acc.log.info("Found %d punctuation-bounded sentences", len(sentences))

    sentences = [s for s in sentences if len(s) > config.MIN_RAW_PUNCT_SENTENCE_LENGTH]
    for sentence in sentences[: config.MAX_SENTENCES]:
        cleaned = unescape(sentence)
        if len(cleaned) <= config.MIN_PUNCT_SENTENCE_LENGTH:
            continue
        if acc.already_contains(cleaned, config.PUNCT_SENTENCE_DEDUP_PREFIX):
            continue
        acc.add(classify_sentence(cleaned), cleaned)


def mine_fallback(script: str, acc: MessageAccumulator) -> None:
    """Last resort: any CJK span, roles alternating user/assistant."""
    if len(acc):
        return

    unique = list(dict.fromkeys(FALLBACK_RE.findall(script)))
    unique = [text for text in unique if 20 < len(text) < 1000]
    for index, text in enumerate(unique[: config.MAX_FALLBACK_FRAGMENTS]):
        role = Role.USER if index % 2 == 0 else Role.ASSISTANT
        acc.add(role, text.strip())


Strategy = Callable[[str, MessageAccumulator], None]

STRATEGIES: tuple[Strategy, ...] = (
    mine_known_prompts,
    mine_labeled_sections,
    mine_paragraphs,
    mine_heading_sections,
    mine_keyword_windows,
    mine_line_sentences,
    mine_punctuated_sentences,
    mine_fallback,
)


def extract_messages(script: str, log: logging.Logger | None = None) -> list[Candidate]:
    """Run every strategy over ``script`` and return the accepted candidates.

    A strategy that raises contributes nothing; the error is logged and the
    chain continues with the next strategy.
    """
    acc = MessageAccumulator(log)
    for strategy in STRATEGIES:
        try:
            strategy(script, acc)
        except Exception:
            acc.log.warning("Heuristic step %s failed", strategy.__name__, exc_info=True)
    acc.log.info("Heuristic extraction produced %d candidates", len(acc))
    return acc.messages
