"""Builds the ``pct create`` invocation from a fully resolved container spec."""

import os
from datetime import datetime
from typing import List, Optional

from lxccreator.errors import CreatorError
from lxccreator.errors_catalog import actionable_error
from lxccreator.models import CommandInvocation, ContainerSpec, CreatorSettings

PCT = "pct"
# The root password is read from stdin so it never shows up in argv or logs.
PASSWORD_STDIN_OPTION = "--password-stdin"


def build_network_descriptor(settings: CreatorSettings, ip_octet: Optional[int] = None) -> str:
    parts = ["name=eth0", f"bridge={settings.bridge}"]

    if not settings.static_network:
        parts.append("ip=dhcp")
        return ",".join(parts)

    if ip_octet is None:
        raise CreatorError("A static network requires the last IPv4 octet.")

    parts.append(f"ip={settings.ipv4_base}{ip_octet}/{settings.ipv4_prefix}")
    if settings.ipv4_gateway:
        parts.append(f"gw={settings.ipv4_gateway}")
    if settings.ipv6_base:
        parts.append(f"ip6={settings.ipv6_base}{ip_octet}/{settings.ipv6_prefix}")
        if settings.ipv6_gateway:
            parts.append(f"gw6={settings.ipv6_gateway}")
    return ",".join(parts)


def build_create_command(
    spec: ContainerSpec,
    settings: CreatorSettings,
    created_at: datetime,
    password_path: Optional[str] = None,
    ssh_key_path: Optional[str] = None,
) -> CommandInvocation:
    missing = spec.missing_fields()
    if missing:
        raise CreatorError(actionable_error("incomplete_spec", fields=", ".join(missing)))

    args: List[str] = [
        "create",
        str(spec.id),
        os.path.join(settings.template_dir, spec.template_file),
        "--hostname",
        spec.hostname,
        "--arch",
        settings.arch,
        "--cores",
        str(spec.cores),
        "--memory",
        str(spec.memory_mb),
        "--swap",
        str(settings.swap_mb),
        "--features",
        f"nesting={1 if settings.nesting else 0}",
        "--unprivileged",
        "1" if spec.unprivileged else "0",
        "--net0",
        build_network_descriptor(settings, spec.ip_octet),
        "--rootfs",
        f"{settings.storage}:{spec.rootfs_gb}",
        "--ostype",
        spec.os_type,
        "--description",
        f"Created by lxc-creator on {created_at:%Y-%m-%d %H:%M:%S}",
    ]

    args.append(PASSWORD_STDIN_OPTION)

    if spec.uses_ssh_key():
        if not ssh_key_path:
            raise CreatorError("SSH key material is set but no staged key file was provided.")
        args.extend(["--ssh-public-keys", ssh_key_path])

    return CommandInvocation(program=PCT, args=tuple(args), stdin_path=password_path)
