"""SSH public key lookup by comment for lxc-creator."""

from typing import Iterable, List, Optional

from lxccreator.constants import SSH_KEY_PREFIXES
from lxccreator.models import CredentialMatch


def is_key_line(line: str) -> bool:
    return any(line.startswith(prefix + " ") for prefix in SSH_KEY_PREFIXES)


def find_key_line(lines: Iterable[str], token: str) -> Optional[str]:
    """Return the first public key line containing ``token``.

    When several keys share the token, file order decides: the first one wins.
    """
    if not token:
        return None

    for raw_line in lines:
        line = raw_line.strip()
        if token in line and is_key_line(line):
            return line
    return None


class CredentialResolver:
    """Finds a key in the host's authorized_keys and stages it for the container.

    A missing store or a missing key is not an error: the caller falls back to
    password login.
    """

    def __init__(self, authorized_keys: str, filesystem_service, logger):
        self.authorized_keys = authorized_keys
        self.filesystem_service = filesystem_service
        self.logger = logger
        self.match: Optional[CredentialMatch] = None

    def read_store(self) -> List[str]:
        try:
            with open(self.authorized_keys, "r", encoding="utf-8", errors="replace") as file_obj:
                return file_obj.readlines()
        except FileNotFoundError:
            self.logger.warning("authorized_keys not found at %s", self.authorized_keys)
        except OSError as exc:
            self.logger.warning("Could not read %s: %s", self.authorized_keys, exc)
        return []

    def resolve(self, token: str, ct_id: Optional[int] = None) -> Optional[CredentialMatch]:
        self.cleanup()

        key_line = find_key_line(self.read_store(), token)
        if key_line is None:
            self.logger.info("No SSH key with comment '%s' in %s", token, self.authorized_keys)
            return None

        prefix = f"lxc_ssh_{ct_id}_" if ct_id is not None else "lxc_ssh_"
        staged_path = self.filesystem_service.create_private_file(key_line, prefix=prefix, suffix=".pub")
        self.match = CredentialMatch(key_line=key_line, staged_path=staged_path)
        return self.match

    def cleanup(self):
        if self.match is not None:
            self.filesystem_service.remove_file(self.match.staged_path)
            self.match = None
