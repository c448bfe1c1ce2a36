"""Template discovery and OS type detection for lxc-creator."""

import fnmatch
import os
from typing import List

from lxccreator.constants import OS_TYPES
from lxccreator.errors import NoTemplatesFound, UnrecognizedOsType
from lxccreator.errors_catalog import actionable_error


def list_templates(directory: str, pattern: str) -> List[str]:
    """Return the sorted file names in ``directory`` matching ``pattern``."""
    try:
        entries = os.listdir(directory)
    except OSError:
        entries = []

    templates = sorted(
        name
        for name in entries
        if fnmatch.fnmatch(name, pattern) and os.path.isfile(os.path.join(directory, name))
    )
    if not templates:
        raise NoTemplatesFound(actionable_error("no_templates", pattern=pattern, directory=directory))
    return templates


def detect_os_type(template_file: str) -> str:
    """Derive the OS family from the part of the file name before the first hyphen."""
    name = os.path.basename(template_file)
    os_type = name.split("-", 1)[0] if "-" in name else ""
    if os_type not in OS_TYPES:
        raise UnrecognizedOsType(
            actionable_error("unknown_os_type", template=name, supported=", ".join(OS_TYPES))
        )
    return os_type


class TemplateResolver:
    """Lets the operator pick one of the templates found on the host."""

    def __init__(self, template_dir: str, pattern: str, messages, logger):
        self.template_dir = template_dir
        self.pattern = pattern
        self.messages = messages
        self.logger = logger

    def select(self, prompter) -> str:
        self.logger.info("%s %s", self.messages("template_select"), self.template_dir)
        templates = list_templates(self.template_dir, self.pattern)
        self.logger.debug("Found %d template(s): %s", len(templates), ", ".join(templates))

        choice = prompter.choose(
            self.messages("template_select"),
            [(name, "") for name in templates],
        )
        self.logger.info(self.messages("template_chosen", template=choice))
        return choice
