import os
import stat

from lxccreator.services.credentials import CredentialResolver, find_key_line
from lxccreator.services.filesystem import FileSystemService

STORE_LINES = [
    "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAA alice@laptop",
    "ssh-rsa BBBBB3NzaC1yc2EAAAADAQAB bob@phone",
]


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


def _resolver(tmp_path, lines=None):
    store = tmp_path / "authorized_keys"
    if lines is not None:
        store.write_text("\n".join(lines) + "\n", encoding="utf-8")
    filesystem = FileSystemService(logger=DummyLogger(), console=DummyConsole(), temp_dir=str(tmp_path))
    return CredentialResolver(authorized_keys=str(store), filesystem_service=filesystem, logger=DummyLogger())


def test_find_key_line_returns_first_match():
    assert find_key_line(STORE_LINES, "laptop") == STORE_LINES[0]
    assert find_key_line(STORE_LINES, "desktop") is None


def test_find_key_line_first_match_wins_on_shared_comment():
    lines = ["ssh-rsa AAAA one@laptop", "ssh-ed25519 BBBB two@laptop"]

    assert find_key_line(lines, "laptop") == "ssh-rsa AAAA one@laptop"


def test_find_key_line_skips_lines_without_key_type_prefix():
    lines = ["# laptop key below", 'command="true" ssh-rsa AAAA x@laptop', "ecdsa-sha2-nistp256 CCCC y@laptop"]

    assert find_key_line(lines, "laptop") == "ecdsa-sha2-nistp256 CCCC y@laptop"


def test_resolve_stages_private_copy(tmp_path):
    resolver = _resolver(tmp_path, STORE_LINES)

    match = resolver.resolve("laptop", ct_id=105)

    assert match.key_line == STORE_LINES[0]
    assert os.path.basename(match.staged_path).startswith("lxc_ssh_105_")
    assert open(match.staged_path, encoding="utf-8").read().strip() == STORE_LINES[0]
    assert stat.S_IMODE(os.stat(match.staged_path).st_mode) == 0o600


def test_resolve_returns_none_when_comment_missing(tmp_path):
    resolver = _resolver(tmp_path, STORE_LINES)

    assert resolver.resolve("desktop") is None
    assert resolver.match is None


def test_resolve_returns_none_when_store_missing(tmp_path):
    resolver = _resolver(tmp_path)

    assert resolver.resolve("laptop") is None


def test_cleanup_removes_staged_file_and_is_idempotent(tmp_path):
    resolver = _resolver(tmp_path, STORE_LINES)
    match = resolver.resolve("phone")

    resolver.cleanup()
    resolver.cleanup()

    assert not os.path.exists(match.staged_path)
    assert resolver.match is None
