"""
Test suite for loading security policies from files and the environment.
"""

import json

import pytest

from sslguard.config import POLICY_FILE_ENV, load_policy, load_policy_from_env, policy_from_mapping
from sslguard.exceptions import PolicyConfigurationError, SSLGuardError
from sslguard.policy import AllActions, SecurityPolicy


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(
        json.dumps(
            {
                "secured": {"users": ["login"], "checkout": "*"},
                "prefixes": "admin",
                "autoRedirect": False,
                "redirect_status_code": 301,
            }
        ),
        encoding="utf-8",
    )
    return path


class TestLoadPolicy:
    """Test load_policy."""

    def test_load_valid_file(self, policy_file):
        policy = load_policy(policy_file)
        assert "login" in policy.secured["users"]
        assert policy.secured["checkout"] == AllActions()
        assert policy.prefixes == frozenset({"admin"})
        assert policy.auto_redirect is False
        assert policy.redirect_status_code == 301

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyConfigurationError, match="Cannot read"):
            load_policy(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PolicyConfigurationError, match="not valid JSON"):
            load_policy(path)

    def test_invalid_policy(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"redirect_status_code": 200}), encoding="utf-8")
        with pytest.raises(PolicyConfigurationError, match="Invalid security policy"):
            load_policy(path)

    def test_non_object_policy(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(PolicyConfigurationError, match="JSON object"):
            load_policy(path)

    def test_configuration_error_hierarchy(self):
        with pytest.raises(SSLGuardError):
            policy_from_mapping({"unknown": True})
        with pytest.raises(ValueError):
            policy_from_mapping({"unknown": True})


class TestLoadPolicyFromEnv:
    """Test load_policy_from_env."""

    def test_reads_file_named_by_env(self, policy_file, monkeypatch):
        monkeypatch.setenv(POLICY_FILE_ENV, str(policy_file))
        assert load_policy_from_env().redirect_status_code == 301

    def test_unset_env_returns_empty_policy(self, monkeypatch):
        monkeypatch.delenv(POLICY_FILE_ENV, raising=False)
        assert load_policy_from_env() == SecurityPolicy()

    def test_unset_env_returns_default(self, monkeypatch):
        monkeypatch.delenv(POLICY_FILE_ENV, raising=False)
        default = SecurityPolicy(prefixes={"admin"})
        assert load_policy_from_env(default) is default
