"""Unit tests for the ask command."""

from pathlib import Path

from debris.analysis.query import NO_PATTERNS_ANSWER
from debris.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestAskCommand:
    """Tests for debris ask."""

    def test_without_snapshot(self, xdg_dirs: Path) -> None:
        result = runner.invoke(app, ["ask", "What's safe to delete?"])

        assert result.exit_code == 0
        assert NO_PATTERNS_ANSWER in result.output

    def test_safe_question(self, xdg_dirs: Path, project_tree: Path) -> None:
        runner.invoke(app, ["scan", "--root", str(project_tree)])

        result = runner.invoke(app, ["ask", "What's safe to delete?"])

        assert result.exit_code == 0
        assert "These patterns are safe to delete:" in result.output
        assert "- node_modules" in result.output
        assert "- __pycache__" in result.output

    def test_largest_question(self, xdg_dirs: Path, project_tree: Path) -> None:
        runner.invoke(app, ["scan", "--root", str(project_tree)])

        result = runner.invoke(app, ["ask", "what takes the most space"])

        assert result.exit_code == 0
        assert "- node_modules: 300 B" in result.output
