"""
Integration test: App startup.

This test verifies the app can import and start without crashing.
This is the most basic integration test - if it fails, nothing works.
"""

import pytest


class TestAppStartup:
    """Verify app can start."""

    def test_app_imports(self):
        """App module imports without error."""
        # This import triggers:
        # - Config load (env, portal.yaml)
        # - All blueprint registrations
        import app
        assert app.app is not None

    def test_flask_app_configured(self):
        """Flask app has required configuration."""
        import app

        blueprint_names = list(app.app.blueprints.keys())
        assert "auth" in blueprint_names
        assert "portal" in blueprint_names
        assert "admin" in blueprint_names
        assert "PORTAL" in app.app.config

    def test_routes_exist(self):
        """Core routes are registered."""
        import app

        rules = [rule.rule for rule in app.app.url_map.iter_rules()]

        assert "/" in rules
        assert "/health" in rules
        assert "/api/auth/login" in rules
        assert "/api/aidois/score" in rules
        assert "/api/admin/stats" in rules

    def test_app_test_client(self):
        """Can create test client and hit index."""
        import app

        client = app.app.test_client()
        response = client.get("/")

        assert response.status_code == 200
        assert response.get_json()["service"] == "aidoi-portal"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}


class TestCli:
    """The CLI entry point parses and dispatches without a backend."""

    def test_no_command_prints_help(self):
        from cli import cli
        assert cli([]) == 0

    def test_score_file(self, tmp_path):
        from cli import cli

        path = tmp_path / "aidoi.yaml"
        path.write_text("metadata:\n  title: Folding notes\n  stage_hypothesis: A\n  provenance_log_available: 'Yes'\n")
        assert cli(["score", str(path)]) == 0

    def test_score_missing_file(self, tmp_path):
        from cli import cli
        assert cli(["score", str(tmp_path / "missing.json")]) == 1

    def test_score_invalid_metadata(self, tmp_path):
        from cli import cli

        path = tmp_path / "aidoi.yaml"
        path.write_text("title: Folding notes\npublication_year: abc\nstage_hypothesis: A\n")
        assert cli(["score", str(path)]) == 1

    def test_whoami(self, admin_token):
        from cli import cli
        assert cli(["whoami", "--token", admin_token]) == 0

    def test_whoami_without_token(self, monkeypatch):
        from cli import cli
        monkeypatch.delenv("AIDOI_TOKEN", raising=False)
        assert cli(["whoami"]) == 1

    @pytest.mark.parametrize("command", ["stats", "pending"])
    def test_admin_commands_need_token(self, monkeypatch, command):
        from cli import cli
        monkeypatch.delenv("AIDOI_TOKEN", raising=False)
        assert cli([command]) == 1
