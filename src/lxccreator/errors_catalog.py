"""Actionable error catalog for lxc-creator."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "root_required": {
        "what": "Root privileges are required to provision containers.",
        "next": "Run lxc-creator as root on the Proxmox host (for example with sudo).",
    },
    "no_free_id": {
        "what": "No free container ID in range {lower}-{upper}.",
        "next": "Remove unused containers or widen `id_min`/`id_max` in the configuration.",
    },
    "no_templates": {
        "what": "No templates matching `{pattern}` found in {directory}.",
        "next": "Download a template with `pveam download` or adjust `template_dir`/`template_pattern`.",
    },
    "unknown_os_type": {
        "what": "Cannot derive a supported OS type from template '{template}'.",
        "next": "Pick a template whose name starts with one of: {supported}.",
    },
    "incomplete_spec": {
        "what": "Container parameters are incomplete: {fields}.",
        "next": "Restart the run and answer every prompt.",
    },
    "command_failed": {
        "what": "Command failed ({returncode}): {command}",
        "next": "Inspect the log file and the Proxmox task log for details.",
    },
    "command_timeout": {
        "what": "Command timed out after {timeout}s: {command}",
        "next": "Check the host load or raise `command_timeout` in the configuration.",
    },
    "command_not_found": {
        "what": "Required command not found: {command}",
        "next": "Run lxc-creator on a Proxmox VE host where `{command}` is installed.",
    },
}


def actionable_error(code: str, **kwargs: object) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
