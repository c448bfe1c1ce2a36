"""Operator input validators for lxc-creator.

Predicates are pure and never raise. The ``ensure_*`` wrappers raise
:class:`ValidationFailure` carrying the message key shown before re-prompting.
"""

import re

from lxccreator.errors import ValidationFailure

HOSTNAME_RE = re.compile(r"[A-Za-z0-9]([-A-Za-z0-9]*[A-Za-z0-9])?")
POSITIVE_INTEGER_RE = re.compile(r"[1-9][0-9]*")
OCTET_RE = re.compile(r"[0-9]{1,3}")

MIN_PASSWORD_LENGTH = 8
# Network (0) and broadcast (255) addresses are not valid host octets.
OCTET_MIN = 1
OCTET_MAX = 254


def is_valid_hostname(raw: str) -> bool:
    return bool(raw) and HOSTNAME_RE.fullmatch(raw) is not None


def is_valid_password(raw: str) -> bool:
    return bool(raw) and len(raw) >= MIN_PASSWORD_LENGTH


def is_positive_integer(raw: str) -> bool:
    return bool(raw) and POSITIVE_INTEGER_RE.fullmatch(raw) is not None


def is_valid_ip_octet(raw: str) -> bool:
    if not raw or OCTET_RE.fullmatch(raw) is None:
        return False
    if len(raw) > 1 and raw.startswith("0"):
        return False
    return OCTET_MIN <= int(raw) <= OCTET_MAX


def is_valid_key_comment(raw: str) -> bool:
    return bool(raw and raw.strip())


def ensure_hostname(raw: str) -> str:
    if not raw:
        raise ValidationFailure("input_empty", raw)
    if not is_valid_hostname(raw):
        raise ValidationFailure("hostname_invalid", raw)
    return raw


def ensure_password(raw: str) -> str:
    if not is_valid_password(raw):
        raise ValidationFailure("password_invalid")
    return raw


def ensure_positive_integer(raw: str) -> int:
    value = raw.strip()
    if not is_positive_integer(value):
        raise ValidationFailure("integer_invalid", raw)
    return int(value)


def ensure_ip_octet(raw: str) -> int:
    value = raw.strip()
    if not is_valid_ip_octet(value):
        raise ValidationFailure("octet_invalid", raw)
    return int(value)


def ensure_key_comment(raw: str) -> str:
    if not is_valid_key_comment(raw):
        raise ValidationFailure("input_empty", raw)
    return raw.strip()
