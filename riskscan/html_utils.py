"""HTML inspection helpers for fetched pages.

Markup is parsed, never rendered: no script in the page is executed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html.parser import HTMLParser


_DYNAMIC_CODE_MARKERS = ("eval(", "Function(")


@dataclass(frozen=True)
class PageFindings:
    form_actions: tuple[str, ...] = field(default_factory=tuple)
    hidden_input_count: int = 0
    has_dynamic_code: bool = False


class _PageParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.form_actions: list[str] = []
        self.hidden_inputs = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_lower = tag.lower()
        attrs_dict = {name.lower(): (value or "") for name, value in attrs}
        if tag_lower == "form":
            action = attrs_dict.get("action", "").strip()
            if action:
                self.form_actions.append(action)
        elif tag_lower == "input":
            if attrs_dict.get("type", "").strip().lower() == "hidden":
                self.hidden_inputs += 1


def inspect_html(html: str) -> PageFindings:
    parser = _PageParser()
    parser.feed(html)
    parser.close()
    return PageFindings(
        form_actions=tuple(parser.form_actions),
        hidden_input_count=parser.hidden_inputs,
        has_dynamic_code=any(marker in html for marker in _DYNAMIC_CODE_MARKERS),
    )


def is_external_action(action: str, host: str) -> bool:
    """True unless the action is root-relative or names the page host."""
    return not action.startswith("/") and host not in action
