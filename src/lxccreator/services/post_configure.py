"""In-container configuration after the first start."""

import shlex
from typing import Dict, List, Optional, Sequence

from lxccreator.constants import CONTAINER_AUTHORIZED_KEYS
from lxccreator.errors import ExternalCommandFailed

UPDATE_SCRIPTS: Dict[str, str] = {
    "debian": (
        "export DEBIAN_FRONTEND=noninteractive && apt-get update -qq && "
        "apt-get upgrade -y -qq && apt-get autoremove -y -qq && apt-get clean -qq"
    ),
    "ubuntu": (
        "export DEBIAN_FRONTEND=noninteractive && apt-get update -qq && "
        "apt-get upgrade -y -qq && apt-get autoremove -y -qq && apt-get clean -qq"
    ),
    "centos": "dnf -y -q upgrade",
    "arch": "pacman -Syu --noconfirm",
    "alpine": "apk update && apk upgrade",
}

SSHD_CONFIG = "/etc/ssh/sshd_config"
SSHD_RESTART = "systemctl restart ssh || systemctl restart sshd || rc-service sshd restart"
# Exit status of the timezone script when the zone file does not exist.
ZONEINFO_MISSING = 3


def build_password_login_script(sshd_config: str = SSHD_CONFIG, restart_command: str = SSHD_RESTART) -> str:
    """Enable root password login; a container without sshd is left untouched."""
    path = shlex.quote(sshd_config)
    return (
        f"if [ -f {path} ]; then "
        f'sed -i "s/^#*PermitRootLogin.*/PermitRootLogin yes/" {path}; '
        f'sed -i "s/^#*PasswordAuthentication.*/PasswordAuthentication yes/" {path}; '
        "fi; "
        f"({restart_command}) >/dev/null 2>&1 || true"
    )


ENABLE_PASSWORD_LOGIN = build_password_login_script()


def centos_langpacks(locales: Sequence[str]) -> List[str]:
    packs: List[str] = []
    for locale in locales:
        language = locale.split("_", 1)[0].split(".", 1)[0].lower()
        pack = f"glibc-langpack-{language}"
        if language not in ("", "c", "posix") and pack not in packs:
            packs.append(pack)
    return packs


def build_locale_script(os_type: str, locales: Sequence[str], default_locale: str) -> Optional[str]:
    quoted = " ".join(shlex.quote(locale) for locale in locales)
    default = shlex.quote(default_locale)

    if os_type in ("debian", "ubuntu"):
        enable = " && ".join(
            f"sed -i 's/^# *{locale}/{locale}/' /etc/locale.gen"
            for locale in locales
        )
        return (
            "set -e; export DEBIAN_FRONTEND=noninteractive; apt-get update -qq; "
            "apt-get install -y -qq locales; "
            f"{enable}; locale-gen {quoted}; update-locale LANG={default}"
        )
    if os_type == "arch":
        enable = " && ".join(
            f"sed -i 's/^#{locale}/{locale}/' /etc/locale.gen" for locale in locales
        )
        return f"set -e; {enable}; locale-gen; echo LANG={default} > /etc/locale.conf"
    if os_type == "centos":
        packs = centos_langpacks(locales)
        install = f"dnf -y -q install {' '.join(packs)}; " if packs else ""
        return f"set -e; {install}localectl set-locale LANG={default}"
    if os_type == "alpine":
        return f"set -e; apk add --quiet musl-locales; echo 'export LANG={default_locale}' > /etc/profile.d/locale.sh"
    return None


def build_timezone_script(timezone: str, os_type: Optional[str] = None) -> str:
    zone = shlex.quote(timezone)
    prepare = "apk add --quiet tzdata || true; " if os_type == "alpine" else ""
    return (
        f"{prepare}test -e /usr/share/zoneinfo/{zone} || exit {ZONEINFO_MISSING}; "
        f"set -e; ln -sf /usr/share/zoneinfo/{zone} /etc/localtime; "
        f"echo {zone} > /etc/timezone"
    )


class PostConfigureService:
    """Runs locale, timezone, update and SSH setup inside a running container."""

    def __init__(self, control_plane, messages, logger, console):
        self.control_plane = control_plane
        self.messages = messages
        self.logger = logger
        self.console = console

    def update_packages(self, ct_id: int, os_type: str):
        self.console.print(f"[blue]{self.messages('update')}[/blue]")
        self.control_plane.exec(ct_id, UPDATE_SCRIPTS[os_type])
        self.logger.info("✅ %s", self.messages("update_ok"))

    def configure_locales(self, ct_id: int, os_type: str, locales: Sequence[str], default_locale: str):
        script = build_locale_script(os_type, locales, default_locale)
        if script is None:
            self.logger.warning("No locale setup available for OS type %s", os_type)
            return
        self.console.print(f"[blue]{self.messages('locale_wait')}[/blue]")
        self.control_plane.exec(ct_id, script)
        self.logger.info("✅ %s (%s)", self.messages("locale_ok"), ", ".join(locales))

    def configure_timezone(self, ct_id: int, timezone: str, os_type: Optional[str] = None):
        returncode = self.control_plane.exec(ct_id, build_timezone_script(timezone, os_type), check=False)
        if returncode == ZONEINFO_MISSING:
            self.logger.warning("Timezone data for %s not found in CT %s; timezone left unchanged", timezone, ct_id)
            return
        if returncode != 0:
            raise ExternalCommandFailed(
                f"Timezone setup failed ({returncode}) in CT {ct_id}", returncode=returncode
            )
        self.logger.info("✅ %s (%s)", self.messages("timezone_ok"), timezone)

    def finalize_ssh(self, ct_id: int, staged_key_path: Optional[str]):
        if staged_key_path:
            self.control_plane.exec(ct_id, "mkdir -p /root/.ssh && chmod 700 /root/.ssh")
            self.control_plane.push(ct_id, staged_key_path, CONTAINER_AUTHORIZED_KEYS)
            self.control_plane.exec(
                ct_id,
                f"chmod 600 {CONTAINER_AUTHORIZED_KEYS} && chown root:root {CONTAINER_AUTHORIZED_KEYS}",
            )
            self.logger.info("✅ %s", self.messages("ssh_setup"))
            return

        self.control_plane.exec(ct_id, ENABLE_PASSWORD_LOGIN)
        self.logger.info(self.messages("ssh_temp"))
