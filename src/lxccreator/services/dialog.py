"""Interactive dialog backends for lxc-creator.

Every backend returns ``None`` when the operator cancels a prompt, which is
distinct from an empty answer.
"""

import subprocess
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from lxccreator.errors import CreatorError

MenuOptions = Sequence[Tuple[str, str]]

WHIPTAIL = "whiptail"
UI_BACKENDS = ("whiptail", "console")


class WhiptailDialog:
    """Dialogs rendered by the ``whiptail`` program.

    whiptail draws on the terminal and writes the answer to stderr; exit code
    0 means OK, anything else (1 Cancel, 255 Esc) means cancelled.
    """

    def __init__(self, backtitle: Optional[str] = None, subprocess_module=subprocess):
        self.backtitle = backtitle
        self.subprocess = subprocess_module

    def _run(self, title: str, box: List[str]) -> Tuple[int, str]:
        cmd = [WHIPTAIL]
        if self.backtitle:
            cmd += ["--backtitle", self.backtitle]
        cmd += ["--title", title] + box
        try:
            result = self.subprocess.run(cmd, stderr=self.subprocess.PIPE, text=True)
        except FileNotFoundError as exc:
            raise CreatorError(
                "whiptail is not installed. Install it or run with `--ui console`."
            ) from exc
        return result.returncode, result.stderr or ""

    def menu(self, title: str, prompt: str, options: MenuOptions) -> Optional[str]:
        items: List[str] = []
        for key, description in options:
            items += [key, description or " "]
        height = min(len(options), 12)
        returncode, answer = self._run(
            title, ["--menu", prompt, str(height + 10), "78", str(height), *items]
        )
        return answer.strip() if returncode == 0 else None

    def input(self, title: str, prompt: str, default: str = "") -> Optional[str]:
        returncode, answer = self._run(title, ["--inputbox", prompt, "10", "70", default])
        return answer.strip() if returncode == 0 else None

    def password(self, title: str, prompt: str) -> Optional[str]:
        returncode, answer = self._run(title, ["--passwordbox", prompt, "10", "70"])
        return answer if returncode == 0 else None

    def message(self, title: str, text: str):
        self._run(title, ["--msgbox", text, str(max(8, text.count("\n") + 8)), "70"])

    def yes_no(self, title: str, text: str) -> bool:
        returncode, _ = self._run(title, ["--yesno", text, str(max(10, text.count("\n") + 8)), "70"])
        return returncode == 0


class ConsoleDialog:
    """Plain terminal dialogs using rich prompts.

    End of input (Ctrl-D) cancels a prompt; answering ``q`` cancels a menu.
    """

    CANCEL_CHOICE = "q"

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def menu(self, title: str, prompt: str, options: MenuOptions) -> Optional[str]:
        table = Table(title=title, show_lines=False)
        table.add_column("#", justify="right")
        table.add_column("Option")
        table.add_column("Description")
        for index, (key, description) in enumerate(options, start=1):
            table.add_row(str(index), key, description or "-")
        self.console.print(table)

        choices = [str(index) for index in range(1, len(options) + 1)] + [self.CANCEL_CHOICE]
        try:
            answer = Prompt.ask(prompt, choices=choices, console=self.console)
        except EOFError:
            return None
        if answer == self.CANCEL_CHOICE:
            return None
        return options[int(answer) - 1][0]

    def input(self, title: str, prompt: str, default: str = "") -> Optional[str]:
        try:
            answer = Prompt.ask(
                f"[bold]{title}[/bold] {prompt}",
                default=default,
                show_default=bool(default),
                console=self.console,
            )
        except EOFError:
            return None
        return answer.strip()

    def password(self, title: str, prompt: str) -> Optional[str]:
        try:
            return Prompt.ask(f"[bold]{title}[/bold] {prompt}", password=True, console=self.console)
        except EOFError:
            return None

    def message(self, title: str, text: str):
        self.console.print(f"[bold]{title}[/bold]")
        self.console.print(text)

    def yes_no(self, title: str, text: str) -> bool:
        try:
            return Confirm.ask(f"[bold]{title}[/bold] {text}", console=self.console)
        except EOFError:
            return False


def create_dialog(ui: str, backtitle: Optional[str] = None, console: Optional[Console] = None):
    if ui == "whiptail":
        return WhiptailDialog(backtitle=backtitle)
    if ui == "console":
        return ConsoleDialog(console=console)
    raise CreatorError(f"Unknown UI backend '{ui}'. Choose one of: {', '.join(UI_BACKENDS)}")
