"""
Test suite for the sslguard command line interface.
"""

import json

import pytest

from sslguard.cli import EXIT_CONFIG_ERROR, EXIT_NO_ACTION, EXIT_REDIRECT, find_app_string, main


@pytest.fixture
def policy_path(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"secured": {"users": ["login"]}, "prefixes": ["admin"]}), encoding="utf-8")
    return str(path)


class TestCheckCommand:
    """Test 'sslguard check'."""

    def test_redirect_to_secure(self, policy_path, capsys):
        code = main([
            "check", "--policy", policy_path,
            "--controller", "users", "--action", "login",
            "--host", "example.com", "--path", "/users/login",
        ])
        assert code == EXIT_REDIRECT
        assert capsys.readouterr().out.strip() == "RedirectToSecure https://example.com/users/login"

    def test_redirect_to_insecure(self, policy_path, capsys):
        code = main([
            "check", "--policy", policy_path,
            "--controller", "users", "--action", "profile", "--secure",
            "--host", "example.com", "--path", "/users/profile", "--query", "tab=1",
        ])
        assert code == EXIT_REDIRECT
        assert capsys.readouterr().out.strip() == "RedirectToInsecure http://example.com/users/profile?tab=1"

    def test_prefix_no_action(self, policy_path, capsys):
        code = main([
            "check", "--policy", policy_path,
            "--controller", "dashboard", "--prefix", "admin", "--secure",
            "--host", "example.com", "--path", "/admin",
        ])
        assert code == EXIT_NO_ACTION
        assert capsys.readouterr().out.strip() == "NoAction"

    def test_bad_policy_file(self, tmp_path, capsys):
        code = main(["--log-format", "json", "check", "--policy", str(tmp_path / "missing.json")])
        assert code == EXIT_CONFIG_ERROR
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["level"] == "ERROR"
        assert "Cannot read security policy" in record["message"]

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestServeCommands:
    """Test 'sslguard dev' and 'sslguard run'."""

    def test_find_app_string(self):
        assert find_app_string("shop.py") == "shop:app"
        assert find_app_string("/srv/project/main.py") == "main:app"

    def test_run_uses_uvicorn(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr("sslguard.cli.uvicorn.run", lambda app, **options: calls.append((app, options)))

        code = main(["run", "--app-file", str(tmp_path / "shop.py"), "--port", "9000"])

        assert code == 0
        app_string, options = calls[0]
        assert app_string == "shop:app"
        assert options["host"] == "0.0.0.0"
        assert options["port"] == 9000
        assert options["reload"] is False

    def test_dev_enables_reload(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr("sslguard.cli.uvicorn.run", lambda app, **options: calls.append(options))

        main(["dev", "--app-file", str(tmp_path / "shop.py")])

        assert calls[0]["host"] == "127.0.0.1"
        assert calls[0]["reload"] is True
        assert calls[0]["reload_dirs"] == [str(tmp_path)]

    def test_server_failure(self, tmp_path, monkeypatch):
        def fail(app, **options):
            raise RuntimeError("cannot import")

        monkeypatch.setattr("sslguard.cli.uvicorn.run", fail)
        assert main(["run", "--app-file", str(tmp_path / "shop.py")]) == 1
