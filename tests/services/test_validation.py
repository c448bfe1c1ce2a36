import pytest

from lxccreator.errors import ValidationFailure
from lxccreator.services import validation


@pytest.mark.parametrize("hostname", ["web-01", "a", "Host9", "db-primary-2"])
def test_hostname_accepts_rfc1123_labels(hostname):
    assert validation.is_valid_hostname(hostname) is True


@pytest.mark.parametrize("hostname", ["", "-bad", "bad-", "bad_host", "web.example", "host name"])
def test_hostname_rejects_invalid_labels(hostname):
    assert validation.is_valid_hostname(hostname) is False


def test_password_requires_eight_characters():
    assert validation.is_valid_password("a" * 7) is False
    assert validation.is_valid_password("") is False
    assert validation.is_valid_password("ä !#$%&x") is True


@pytest.mark.parametrize("raw", ["512", "1", "20480"])
def test_positive_integer_accepts_plain_numbers(raw):
    assert validation.is_positive_integer(raw) is True


@pytest.mark.parametrize("raw", ["0", "12a", "-5", "007", "", " 5", "1.5"])
def test_positive_integer_rejects_other_input(raw):
    assert validation.is_positive_integer(raw) is False


@pytest.mark.parametrize("raw,expected", [("1", True), ("254", True), ("0", False), ("255", False), ("01", False), ("abc", False), ("1000", False)])
def test_ip_octet_excludes_network_and_broadcast(raw, expected):
    assert validation.is_valid_ip_octet(raw) is expected


def test_ensure_hostname_reports_empty_input_separately():
    with pytest.raises(ValidationFailure) as empty:
        validation.ensure_hostname("")
    with pytest.raises(ValidationFailure) as invalid:
        validation.ensure_hostname("bad_host")

    assert empty.value.message_key == "input_empty"
    assert invalid.value.message_key == "hostname_invalid"


def test_ensure_positive_integer_returns_int():
    assert validation.ensure_positive_integer("512") == 512


def test_ensure_key_comment_strips_whitespace():
    assert validation.ensure_key_comment("  laptop ") == "laptop"

    with pytest.raises(ValidationFailure, match="input_empty"):
        validation.ensure_key_comment("   ")
