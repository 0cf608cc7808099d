"""Select the slice of the message chain to render."""

from __future__ import annotations

from .models import MessageNode, MessageWindow, WindowSpec


def select_window(messages: list[MessageNode], spec: WindowSpec) -> MessageWindow:
    """Apply range options to the ordered chain.

    Precedence: ``start_index`` + ``end_index`` as a half-open range, then
    ``start_index`` with an optional ``max_messages`` length, then
    ``skip_messages`` with an optional ``max_messages`` length. ``end_index``
    on its own is ignored. Out-of-range bounds clamp like ordinary slicing.
    """
    if spec.start_index is not None and spec.end_index is not None:
        start = spec.start_index
        selected = messages[start : spec.end_index]
    else:
        if spec.start_index is not None:
            start = spec.start_index
        else:
            start = spec.skip_messages or 0
        end = start + spec.max_messages if spec.max_messages else len(messages)
        selected = messages[start:end]

    total = len(messages)
    return MessageWindow(
        messages=selected,
        total=total,
        skipped=start,
        truncated=max(total - start - len(selected), 0),
    )
