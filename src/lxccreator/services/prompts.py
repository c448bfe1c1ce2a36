"""Validated prompt loops on top of a dialog backend."""

from typing import Callable, Optional, TypeVar

from lxccreator.errors import OperatorCancelled, ValidationFailure
from lxccreator.services.dialog import MenuOptions

T = TypeVar("T")


class Prompter:
    """Asks until the answer validates; cancelling any prompt aborts the run."""

    def __init__(self, dialog, messages, logger):
        self.dialog = dialog
        self.messages = messages
        self.logger = logger
        self.ct_id: Optional[int] = None

    def title(self, label: str) -> str:
        if self.ct_id is None:
            return label
        return f"CT {self.ct_id} - {label}"

    def _cancelled(self) -> OperatorCancelled:
        return OperatorCancelled(self.messages("abort"))

    def _rejected(self, exc: ValidationFailure):
        self.logger.debug("Input rejected (%s)", exc.message_key)
        self.dialog.message(self.title(self.messages("title_error")), self.messages(exc.message_key))

    def ask(self, label: str, prompt: str, convert: Callable[[str], T], default: str = "") -> T:
        while True:
            raw = self.dialog.input(self.title(label), prompt, default)
            if raw is None:
                raise self._cancelled()
            try:
                return convert(raw)
            except ValidationFailure as exc:
                self._rejected(exc)

    def ask_secret(self, label: str, prompt: str, convert: Callable[[str], T]) -> T:
        while True:
            raw = self.dialog.password(self.title(label), prompt)
            if raw is None:
                raise self._cancelled()
            try:
                return convert(raw)
            except ValidationFailure as exc:
                self._rejected(exc)

    def choose(self, prompt: str, options: MenuOptions, label: str = "") -> str:
        answer = self.dialog.menu(self.title(label or prompt), prompt, options)
        if not answer:
            raise self._cancelled()
        return answer

    def confirm(self, text: str, label: str = "") -> bool:
        return self.dialog.yes_no(self.title(label or self.messages("title_info")), text)

    def inform(self, text: str, label: str = ""):
        self.dialog.message(self.title(label or self.messages("title_info")), text)

    def error(self, text: str):
        self.dialog.message(self.title(self.messages("title_error")), text)
