"""Tests for backup filename stems."""

import pytest

from core.errors import IdentityError
from core.identity import hostname_from_advertised, hostname_from_cfg, resolve_identity
from models.types import IdentityPolicy
from tests.helpers import make_record


class TestHostnameFromCfg:
    def test_success(self):
        assert hostname_from_cfg({"id": {"name": "test_device"}}) == "test_device"

    def test_surrounding_whitespace_is_kept(self):
        assert hostname_from_cfg({"id": {"name": "  test_device  "}}) == "  test_device  "

    @pytest.mark.parametrize("cfg, message", [
        ({"other": "value"}, "Missing 'id' field in cfg.json"),
        ({"id": {"other": "value"}}, "Missing 'name' field in cfg.json"),
        ({"id": {"name": 123}}, "Expected 'name' to be a string in cfg.json"),
        ({"id": {"name": ""}}, "Hostname is empty or contains only whitespace"),
        ({"id": {"name": "   \t\n  "}}, "Hostname is empty or contains only whitespace"),
    ])
    def test_errors(self, cfg, message):
        with pytest.raises(IdentityError) as exc_info:
            hostname_from_cfg(cfg)
        assert str(exc_info.value) == message

    def test_non_object_document(self):
        with pytest.raises(IdentityError, match="Missing 'id' field"):
            hostname_from_cfg(["id"])

    def test_non_object_id(self):
        with pytest.raises(IdentityError, match="Missing 'name' field"):
            hostname_from_cfg({"id": "desk"})


class TestHostnameFromAdvertised:
    @pytest.mark.parametrize("hostname, expected", [
        ("foo.local.", "foo"),
        ("wled-kitchen.local", "wled-kitchen"),
        ("testwled", "testwled"),
        ("", "wled"),
        (".local.", "wled"),
    ])
    def test_strip(self, hostname, expected):
        assert hostname_from_advertised(hostname) == expected


def test_resolve_identity_config_policy():
    record = make_record("mdns-name.local.", 80)
    target = resolve_identity(record, IdentityPolicy.CONFIG, {"id": {"name": "Desk"}})
    assert target.identifier == "Desk"
    assert target.policy is IdentityPolicy.CONFIG


def test_resolve_identity_config_policy_requires_cfg():
    with pytest.raises(IdentityError):
        resolve_identity(make_record("mdns-name.local.", 80), IdentityPolicy.CONFIG)


def test_resolve_identity_hostname_policy_ignores_cfg():
    record = make_record("mdns-name.local.", 80)
    target = resolve_identity(record, IdentityPolicy.HOSTNAME, {"id": {"name": "Desk"}})
    assert target.identifier == "mdns-name"
