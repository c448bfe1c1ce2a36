"""Shared domain models for lxc-creator."""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from lxccreator import constants


@dataclass
class ContainerSpec:
    """Parameters of the container being provisioned, filled stage by stage."""

    id: Optional[int] = None
    hostname: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    cores: Optional[int] = None
    memory_mb: Optional[int] = None
    rootfs_gb: Optional[int] = None
    template_file: Optional[str] = None
    os_type: Optional[str] = None
    ip_octet: Optional[int] = None
    ssh_public_key: Optional[str] = None
    unprivileged: bool = False

    REQUIRED_FIELDS = (
        "id",
        "hostname",
        "password",
        "cores",
        "memory_mb",
        "rootfs_gb",
        "template_file",
        "os_type",
    )

    def missing_fields(self) -> List[str]:
        return [name for name in self.REQUIRED_FIELDS if getattr(self, name) in (None, "")]

    def uses_ssh_key(self) -> bool:
        return bool(self.ssh_public_key)


@dataclass(frozen=True)
class CredentialMatch:
    """A single authorized-keys line staged into a private temporary file."""

    key_line: str
    staged_path: str


@dataclass(frozen=True)
class CommandInvocation:
    """Program and argument list for a child process; never holds secrets."""

    program: str
    args: Tuple[str, ...]
    stdin_path: Optional[str] = None

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        return shlex.join(self.argv)


@dataclass
class CreatorSettings:
    """Host-level configuration resolved from defaults, config file and CLI."""

    template_dir: str = constants.TEMPLATE_DIR
    template_pattern: str = constants.TEMPLATE_PATTERN
    storage: str = constants.STORAGE
    bridge: str = constants.NETWORK_BRIDGE
    arch: str = constants.ARCH
    swap_mb: int = constants.SWAP_MB
    unprivileged: bool = False
    nesting: bool = True
    id_min: int = constants.ID_RANGE_MIN
    id_max: int = constants.ID_RANGE_MAX
    default_cores: int = constants.DEFAULT_CORES
    default_memory_mb: int = constants.DEFAULT_MEMORY_MB
    default_rootfs_gb: int = constants.DEFAULT_ROOTFS_GB
    authorized_keys: str = constants.AUTHORIZED_KEYS
    ipv4_base: Optional[str] = None
    ipv4_prefix: int = 24
    ipv4_gateway: Optional[str] = None
    ipv6_base: Optional[str] = None
    ipv6_prefix: int = 64
    ipv6_gateway: Optional[str] = None
    locales: Tuple[str, ...] = constants.DEFAULT_LOCALES
    default_locale: Optional[str] = None
    timezone: str = constants.DEFAULT_TIMEZONE
    update_packages: bool = False
    command_timeout: Optional[float] = constants.COMMAND_TIMEOUT_SECONDS

    @property
    def static_network(self) -> bool:
        return bool(self.ipv4_base)
