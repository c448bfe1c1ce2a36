import subprocess

from lxccreator.models import CommandInvocation
from lxccreator.services.control_plane import ProxmoxControlPlane, parse_container_ids

PCT_LIST_OUTPUT = """VMID       Status     Lock         Name
100        running                 proxy
101        stopped                 db
205        running                 web-01
"""


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class RecordingRunner:
    def __init__(self, stdout=""):
        self.calls = []
        self.stdout = stdout

    def run(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, 0, stdout=self.stdout, stderr="")


def test_parse_container_ids_skips_header():
    assert parse_container_ids(PCT_LIST_OUTPUT) == {100, 101, 205}
    assert parse_container_ids("") == set()


def test_list_ids_runs_pct_list():
    runner = RecordingRunner(stdout=PCT_LIST_OUTPUT)
    control_plane = ProxmoxControlPlane(command_runner=runner, logger=DummyLogger())

    assert control_plane.list_ids() == {100, 101, 205}
    assert runner.calls[0][0] == ["pct", "list"]


def test_create_passes_stdin_and_display():
    runner = RecordingRunner()
    control_plane = ProxmoxControlPlane(command_runner=runner, logger=DummyLogger())
    invocation = CommandInvocation(program="pct", args=("create", "100", "tpl"), stdin_path="/tmp/pw")

    control_plane.create(invocation)

    cmd, kwargs = runner.calls[0]
    assert cmd == ["pct", "create", "100", "tpl"]
    assert kwargs["stdin_path"] == "/tmp/pw"
    assert kwargs["display"] == "pct create 100 tpl"


def test_exec_wraps_script_in_shell():
    runner = RecordingRunner()
    control_plane = ProxmoxControlPlane(command_runner=runner, logger=DummyLogger())

    assert control_plane.exec(100, "echo ok") == 0
    assert runner.calls[0][0] == ["pct", "exec", "100", "--", "sh", "-c", "echo ok"]


def test_push_sets_owner_and_permissions():
    runner = RecordingRunner()
    control_plane = ProxmoxControlPlane(command_runner=runner, logger=DummyLogger())

    control_plane.push(100, "/tmp/key.pub", "/root/.ssh/authorized_keys")

    assert runner.calls[0][0] == [
        "pct",
        "push",
        "100",
        "/tmp/key.pub",
        "/root/.ssh/authorized_keys",
        "--perms",
        "0600",
        "--user",
        "0",
        "--group",
        "0",
    ]
