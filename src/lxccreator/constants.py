"""Defaults and closed enumerations for lxc-creator."""

OS_TYPES = ("debian", "ubuntu", "centos", "arch", "alpine")

SSH_KEY_PREFIXES = (
    "ssh-rsa",
    "ssh-ed25519",
    "ssh-dss",
    "ecdsa-sha2-nistp256",
    "ecdsa-sha2-nistp384",
    "ecdsa-sha2-nistp521",
    "sk-ssh-ed25519@openssh.com",
    "sk-ecdsa-sha2-nistp256@openssh.com",
)

SUPPORTED_LANGUAGES = ("en", "de")
LANGUAGE_ENV_VAR = "LXC_CREATOR_LANG"

ID_RANGE_MIN = 100
ID_RANGE_MAX = 999

TEMPLATE_DIR = "/var/lib/vz/template/cache"
TEMPLATE_PATTERN = "*-standard_*.tar.zst"
STORAGE = "local-lvm"
NETWORK_BRIDGE = "vmbr0"
ARCH = "amd64"
SWAP_MB = 512

DEFAULT_CORES = 1
DEFAULT_MEMORY_MB = 512
DEFAULT_ROOTFS_GB = 2

AUTHORIZED_KEYS = "/root/.ssh/authorized_keys"
CONTAINER_AUTHORIZED_KEYS = "/root/.ssh/authorized_keys"

DEFAULT_LOCALES = ("en_US.UTF-8",)
DEFAULT_TIMEZONE = "UTC"
COMMAND_TIMEOUT_SECONDS = 600.0
LOG_DIR = "/var/log/lxc-creator"

PRIVATE_FILE_MODE = 0o600
