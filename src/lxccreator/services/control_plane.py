"""Adapter for the Proxmox ``pct`` command line."""

from typing import List, Set

from lxccreator.models import CommandInvocation
from lxccreator.services.command_builder import PCT


class ProxmoxControlPlane:
    """Container operations against the local Proxmox host via ``pct``."""

    def __init__(self, command_runner, logger, program: str = PCT):
        self.command_runner = command_runner
        self.logger = logger
        self.program = program

    def _pct(self, *args: str) -> List[str]:
        return [self.program, *args]

    def list_ids(self) -> Set[int]:
        result = self.command_runner.run(self._pct("list"), capture_output=True)
        return parse_container_ids(result.stdout or "")

    def create(self, invocation: CommandInvocation):
        self.command_runner.run(
            invocation.argv,
            stdin_path=invocation.stdin_path,
            display=invocation.display(),
        )

    def start(self, ct_id: int):
        self.command_runner.run(self._pct("start", str(ct_id)))

    def exec(self, ct_id: int, script: str, check: bool = True) -> int:
        result = self.command_runner.run(
            self._pct("exec", str(ct_id), "--", "sh", "-c", script),
            check=check,
            capture_output=True,
        )
        return result.returncode

    def push(self, ct_id: int, local_path: str, remote_path: str, perms: str = "0600"):
        self.command_runner.run(
            self._pct(
                "push",
                str(ct_id),
                local_path,
                remote_path,
                "--perms",
                perms,
                "--user",
                "0",
                "--group",
                "0",
            )
        )

    def reboot(self, ct_id: int):
        self.command_runner.run(self._pct("reboot", str(ct_id)))


def parse_container_ids(output: str) -> Set[int]:
    """Extract the VMID column from ``pct list`` output."""
    ids: Set[int] = set()
    for line in output.splitlines()[1:]:
        fields = line.split()
        if fields and fields[0].isdigit():
            ids.add(int(fields[0]))
    return ids
