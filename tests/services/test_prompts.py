import pytest

from lxccreator.errors import OperatorCancelled
from lxccreator.messages import MessageCatalog
from lxccreator.services import validation
from lxccreator.services.prompts import Prompter


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class ScriptedDialog:
    def __init__(self, answers):
        self.answers = list(answers)
        self.shown = []

    def input(self, title, prompt, default=""):
        return self.answers.pop(0)

    def password(self, title, prompt):
        return self.answers.pop(0)

    def menu(self, title, prompt, options):
        return self.answers.pop(0)

    def message(self, title, text):
        self.shown.append((title, text))

    def yes_no(self, title, text):
        return self.answers.pop(0)


def _prompter(answers):
    dialog = ScriptedDialog(answers)
    return Prompter(dialog=dialog, messages=MessageCatalog("en"), logger=DummyLogger()), dialog


def test_ask_reprompts_until_valid():
    prompter, dialog = _prompter(["", "bad_host", "web-01"])

    assert prompter.ask("Hostname", "Hostname:", validation.ensure_hostname) == "web-01"
    assert [text for _, text in dialog.shown] == [
        "Input must not be empty.",
        "Invalid hostname. Use letters, digits and inner hyphens only.",
    ]


def test_ask_cancel_aborts_instead_of_retrying():
    prompter, _ = _prompter([None])

    with pytest.raises(OperatorCancelled):
        prompter.ask("CPU", "Cores:", validation.ensure_positive_integer)


def test_ask_secret_rejects_short_password():
    prompter, dialog = _prompter(["short", "long-enough"])

    assert prompter.ask_secret("Password", "Password:", validation.ensure_password) == "long-enough"
    assert len(dialog.shown) == 1


def test_choose_cancel_aborts():
    prompter, _ = _prompter([None])

    with pytest.raises(OperatorCancelled):
        prompter.choose("Pick", [("a", "")])


def test_title_includes_container_id():
    prompter, _ = _prompter([])
    prompter.ct_id = 105

    assert prompter.title("Hostname") == "CT 105 - Hostname"
