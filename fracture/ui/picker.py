"""Searchable single-choice picker built on Textual.

The picker's outcome is a Selection; a cancelled pick is a normal result,
not an exception.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from fracture.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Choice:
    """One pickable item.

    ``keywords`` are what the search term is matched against; the label is
    used when none are given.
    """

    label: str
    value: str
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, term: str) -> bool:
        term = term.strip().lower()
        if not term:
            return True
        haystacks = self.keywords or (self.label,)
        return any(term in haystack.lower() for haystack in haystacks)


@dataclass(frozen=True)
class Selection:
    """Outcome of a pick: the chosen value, or None when the user cancelled."""

    value: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.value is None

    @classmethod
    def cancel(cls) -> "Selection":
        return cls(None)


def filter_choices(choices: Sequence[Choice], term: str) -> List[Choice]:
    """Case-insensitive substring filter over each choice's keywords."""
    return [choice for choice in choices if choice.matches(term)]


class PickerApp(App[Optional[str]]):
    """Inline search box over a list of choices."""

    CSS = """
    Screen {
        height: auto;
        max-height: 18;
    }

    #picker-prompt {
        height: 1;
        color: $accent;
    }

    #picker-search {
        height: 3;
    }

    #picker-options {
        height: auto;
        max-height: 12;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
    ]

    def __init__(self, choices: Sequence[Choice], prompt: str):
        super().__init__()
        self.choices = list(choices)
        self.prompt = prompt
        self.visible_choices: List[Choice] = list(choices)

    def compose(self) -> ComposeResult:
        yield Static(self.prompt, id="picker-prompt")
        yield Input(placeholder="Type to search...", id="picker-search")
        yield OptionList(id="picker-options")

    def on_mount(self) -> None:
        self._refresh_options("")
        self.query_one("#picker-search", Input).focus()

    def _refresh_options(self, term: str) -> None:
        self.visible_choices = filter_choices(self.choices, term)
        option_list = self.query_one("#picker-options", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(choice.label) for choice in self.visible_choices])
        if self.visible_choices:
            option_list.highlighted = 0

    def _choose(self, index: Optional[int]) -> None:
        if index is None or not 0 <= index < len(self.visible_choices):
            self.bell()
            return
        self.exit(self.visible_choices[index].value)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_options(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._choose(self.query_one("#picker-options", OptionList).highlighted)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._choose(event.option_index)

    def action_cursor_down(self) -> None:
        self.query_one("#picker-options", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#picker-options", OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit(None)


def pick(choices: Sequence[Choice], prompt: str) -> Selection:
    """Let the user pick one choice.

    Returns:
        Selection; ``cancelled`` is True on escape, ctrl+c or interrupt
    """
    app = PickerApp(choices, prompt)
    try:
        value = app.run(inline=True)
    except KeyboardInterrupt:
        logger.debug("Picker interrupted")
        return Selection.cancel()
    return Selection(value)
