"""Tests for the Typer command line."""
import pytest
from typer.testing import CliRunner

from weanwise.cli import app as cli_app

runner = CliRunner()


@pytest.fixture(autouse=True)
def sqlite_env(monkeypatch, tmp_path):
    """Point the CLI at a fresh SQLite file."""
    monkeypatch.setenv("WEANWISE_BACKEND", "sqlite")
    monkeypatch.setenv("WEANWISE_DB_PATH", str(tmp_path / "weanwise.db"))
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def fake_llm(monkeypatch, scripted_llm):
    """Replace the configured provider with a scripted one."""
    llm = scripted_llm(["DAY 1:\n- 08:00 banana puree"])
    monkeypatch.setattr(cli_app, "require_llm", lambda *args, **kwargs: llm)
    return llm


PLAN_ARGS = ["plan", "--age", "6-8", "--height", "66", "--weight", "7.5", "--sex", "boy"]


def _signup(email="parent@example.com"):
    return runner.invoke(cli_app.app, ["signup", "--email", email, "--password", "secret123"])


class TestAccountCommands:

    def test_whoami_signed_out(self):
        result = runner.invoke(cli_app.app, ["whoami"])
        assert result.exit_code == 0
        assert "Not signed in" in result.output

    def test_signup_then_whoami(self):
        assert _signup().exit_code == 0

        result = runner.invoke(cli_app.app, ["whoami"])
        assert "parent@example.com" in result.output

    def test_duplicate_signup_fails(self):
        _signup()
        result = _signup()
        assert result.exit_code == 1
        assert "already registered" in result.output

    def test_logout_then_login(self):
        _signup()
        assert runner.invoke(cli_app.app, ["logout"]).exit_code == 0
        assert "Not signed in" in runner.invoke(cli_app.app, ["whoami"]).output

        result = runner.invoke(
            cli_app.app, ["login", "--email", "parent@example.com", "--password", "secret123"]
        )
        assert result.exit_code == 0
        assert "Signed in as parent@example.com" in result.output

    def test_login_wrong_password(self):
        _signup()
        runner.invoke(cli_app.app, ["logout"])
        result = runner.invoke(
            cli_app.app, ["login", "--email", "parent@example.com", "--password", "nope-nope"]
        )
        assert result.exit_code == 1
        assert "Invalid login credentials" in result.output

    def test_unusable_database_path(self, monkeypatch, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        monkeypatch.setenv("WEANWISE_DB_PATH", str(blocker / "weanwise.db"))

        result = runner.invoke(cli_app.app, ["whoami"])

        assert result.exit_code == 1
        assert "Failed to open SQLite database" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestPlanCommand:

    def test_missing_required_options(self):
        result = runner.invoke(cli_app.app, ["plan", "--age", "6-8"])
        assert result.exit_code == 1
        assert "Missing required intake fields" in result.output

    def test_weight_out_of_range(self):
        result = runner.invoke(cli_app.app, PLAN_ARGS[:-4] + ["--weight", "40", "--sex", "boy"])
        assert result.exit_code == 1
        assert "weight_kg" in result.output

    def test_no_provider_configured(self):
        result = runner.invoke(cli_app.app, PLAN_ARGS)
        assert result.exit_code == 1
        assert "LLM provider not configured" in result.output

    def test_generate_plan(self, fake_llm):
        result = runner.invoke(cli_app.app, PLAN_ARGS + ["--meals", "4", "--allergy", "Dairy"])

        assert result.exit_code == 0, result.output
        assert "banana puree" in result.output
        system = fake_llm.calls[0]["messages"][0].content
        assert "Each day must have 4 meals" in system
        assert fake_llm.closed

    def test_save_requires_sign_in(self, fake_llm):
        result = runner.invoke(cli_app.app, PLAN_ARGS + ["--save"])

        assert result.exit_code == 1
        assert "Please sign in to save your food plan" in result.output

    def test_save_with_unusable_database_path(self, fake_llm, monkeypatch, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        monkeypatch.setenv("WEANWISE_DB_PATH", str(blocker / "weanwise.db"))

        result = runner.invoke(cli_app.app, PLAN_ARGS + ["--save"])

        assert result.exit_code == 1
        assert "Failed to open SQLite database" in result.output

    def test_save_then_list_and_show(self, fake_llm):
        _signup()
        result = runner.invoke(cli_app.app, PLAN_ARGS + ["--goal", "picky-eater", "--save"])
        assert result.exit_code == 0, result.output
        assert "Plan saved" in result.output

        listing = runner.invoke(cli_app.app, ["logs", "list"])
        assert listing.exit_code == 0
        assert "Food Logs" in listing.output


class TestLogsCommands:

    def test_list_requires_sign_in(self):
        result = runner.invoke(cli_app.app, ["logs", "list"])
        assert result.exit_code == 1
        assert "sign in" in result.output

    def test_list_empty(self):
        _signup()
        result = runner.invoke(cli_app.app, ["logs", "list"])
        assert result.exit_code == 0
        assert "No saved food plans yet" in result.output

    def test_show_and_delete_unknown(self):
        _signup()
        show = runner.invoke(cli_app.app, ["logs", "show", "missing-id"])
        assert show.exit_code == 1
        assert "not found" in show.output

        delete = runner.invoke(cli_app.app, ["logs", "delete", "missing-id", "--yes"])
        assert delete.exit_code == 1
        assert "Failed to delete log" in delete.output
