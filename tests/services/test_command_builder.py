from datetime import datetime

import pytest

from lxccreator.errors import CreatorError
from lxccreator.models import ContainerSpec, CreatorSettings
from lxccreator.services.command_builder import build_create_command, build_network_descriptor

CREATED_AT = datetime(2025, 7, 20, 14, 30, 0)


def _spec(**overrides) -> ContainerSpec:
    values = dict(
        id=105,
        hostname="web-01",
        password="s3cret-pass",
        cores=2,
        memory_mb=1024,
        rootfs_gb=8,
        template_file="debian-12-standard_12.7-1_amd64.tar.zst",
        os_type="debian",
    )
    values.update(overrides)
    return ContainerSpec(**values)


def _option(args, name):
    return args[args.index(name) + 1]


def test_create_command_contains_all_required_options():
    settings = CreatorSettings(template_dir="/tpl", storage="FP1000GB", bridge="vmbr2")

    invocation = build_create_command(_spec(), settings, CREATED_AT, password_path="/tmp/pw")

    args = list(invocation.args)
    assert invocation.program == "pct"
    assert args[:3] == ["create", "105", "/tpl/debian-12-standard_12.7-1_amd64.tar.zst"]
    assert _option(args, "--hostname") == "web-01"
    assert _option(args, "--arch") == "amd64"
    assert _option(args, "--cores") == "2"
    assert _option(args, "--memory") == "1024"
    assert _option(args, "--swap") == "512"
    assert _option(args, "--features") == "nesting=1"
    assert _option(args, "--unprivileged") == "0"
    assert _option(args, "--net0") == "name=eth0,bridge=vmbr2,ip=dhcp"
    assert _option(args, "--rootfs") == "FP1000GB:8"
    assert _option(args, "--ostype") == "debian"
    assert "2025-07-20 14:30:00" in _option(args, "--description")
    assert "--password-stdin" in args
    assert "--ssh-public-keys" not in args
    assert invocation.stdin_path == "/tmp/pw"


def test_create_command_never_contains_password():
    invocation = build_create_command(_spec(), CreatorSettings(), CREATED_AT, password_path="/tmp/pw")

    assert "s3cret-pass" not in invocation.display()
    assert "s3cret-pass" not in invocation.argv


def test_create_command_follows_selected_container_type():
    invocation = build_create_command(_spec(unprivileged=True), CreatorSettings(), CREATED_AT)

    assert _option(list(invocation.args), "--unprivileged") == "1"


def test_create_command_adds_ssh_key_only_when_present():
    spec = _spec(ssh_public_key="ssh-ed25519 AAAA alice@laptop")

    invocation = build_create_command(spec, CreatorSettings(), CREATED_AT, ssh_key_path="/tmp/key.pub")

    assert _option(list(invocation.args), "--ssh-public-keys") == "/tmp/key.pub"


def test_create_command_rejects_incomplete_spec():
    with pytest.raises(CreatorError, match="incomplete: hostname, os_type"):
        build_create_command(_spec(hostname=None, os_type=None), CreatorSettings(), CREATED_AT)


def test_static_network_descriptor_uses_octet():
    settings = CreatorSettings(
        bridge="vmbr0",
        ipv4_base="192.168.10.",
        ipv4_gateway="192.168.10.1",
        ipv6_base="fd00:1234:abcd:10::",
        ipv6_gateway="fd00:1234:abcd:10::1",
    )

    descriptor = build_network_descriptor(settings, 42)

    assert descriptor == (
        "name=eth0,bridge=vmbr0,ip=192.168.10.42/24,gw=192.168.10.1,"
        "ip6=fd00:1234:abcd:10::42/64,gw6=fd00:1234:abcd:10::1"
    )


def test_static_network_requires_octet():
    with pytest.raises(CreatorError, match="octet"):
        build_network_descriptor(CreatorSettings(ipv4_base="10.0.0."), None)
