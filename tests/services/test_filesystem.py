import os
import stat

from lxccreator.services.filesystem import FileSystemService


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


def test_create_private_file_is_owner_only(tmp_path):
    service = FileSystemService(logger=DummyLogger(), console=DummyConsole(), temp_dir=str(tmp_path))

    path = service.create_private_file("secret", prefix="lxc_pw_")

    assert os.path.dirname(path) == str(tmp_path)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    assert open(path, encoding="utf-8").read() == "secret\n"


def test_remove_file_is_idempotent(tmp_path):
    service = FileSystemService(logger=DummyLogger(), console=DummyConsole(), temp_dir=str(tmp_path))
    path = service.create_private_file("x", prefix="lxc_")

    service.remove_file(path)
    service.remove_file(path)
    service.remove_file(None)

    assert not os.path.exists(path)
