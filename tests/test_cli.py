import json
from pathlib import Path
import textwrap

from typer.testing import CliRunner

from docsgen.cli import app

runner = CliRunner()


def write(p: Path, s: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")


def _repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    write(
        repo / "handlers.py",
        '''
        def get_users(request):
            """@docs Returns all users.
            @path /users
            @method GET
            @parameters limit int false
            @response GetUsersResponse
            """
        ''',
    )
    return repo


def test_generate_writes_docs_file(tmp_path: Path):
    repo = _repo(tmp_path)
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["generate", str(repo), "--output", "yaml", "--filename", "api", "--out-dir", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "api.yml").exists()
    assert "Endpoints found" in result.output


def test_endpoints_json_lists_parsed_endpoints(tmp_path: Path):
    repo = _repo(tmp_path)

    result = runner.invoke(app, ["endpoints", str(repo), "--format", "json"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert [(r["method"], r["path"], r["handler"]) for r in rows] == [("GET", "/users", "get_users")]
    assert rows[0]["parameters"] == [{"name": "limit", "type": "int", "required": False}]


def test_endpoints_table(tmp_path: Path):
    result = runner.invoke(app, ["endpoints", str(_repo(tmp_path))])
    assert result.exit_code == 0, result.output
    assert "get_users" in result.output


def test_no_files_exits_with_error(tmp_path: Path):
    repo = _repo(tmp_path)
    result = runner.invoke(app, ["endpoints", str(repo), "--pattern", "*.go"])
    assert result.exit_code == 1
    assert "no files to parse" in result.output


def test_invalid_log_level_is_a_usage_error(tmp_path: Path):
    result = runner.invoke(app, ["generate", str(_repo(tmp_path)), "--log-level", "foo"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
