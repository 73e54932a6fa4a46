"""End-to-end tests for the oas2sls CLI (convert, inspect, entry point)."""

from __future__ import annotations

import json
import re
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from oas2sls import __version__
from oas2sls.app import app, main
from oas2sls.exceptions import SpecParseError

runner = CliRunner()

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


@pytest.fixture
def swagger_in_cwd(isolated_config: Path, shop_swagger_path: Path) -> Path:
    """Copy the shop fixture to ``swagger.yaml`` in the isolated cwd."""
    target = isolated_config / "swagger.yaml"
    target.write_text(shop_swagger_path.read_text(encoding="utf-8"))
    return target


# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------


class TestRootApp:
    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        text = _strip_ansi(result.output)
        assert "convert" in text
        assert "inspect" in text

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"oas2sls {__version__}" in result.output

    def test_convert_help_shows_options(self) -> None:
        result = runner.invoke(app, ["convert", "--help"])
        assert result.exit_code == 0
        text = _strip_ansi(result.output)
        for flag in ("--api-prefix", "--options-method", "--output-dir", "--format"):
            assert flag in text


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------


class TestConvertCommand:
    def test_prints_yaml_stream(
        self, isolated_config: Path, shop_swagger_path: Path
    ) -> None:
        result = runner.invoke(
            app, ["-q", "convert", str(shop_swagger_path), "--api-prefix", "api"]
        )
        assert result.exit_code == 0, result.output
        configs = list(yaml.safe_load_all(result.stdout))
        assert [c["service"] for c in configs] == ["users", "user-orders"]
        assert "getOrdersWithUseIdOrdSta" in configs[1]["functions"]

    def test_prints_json(self, isolated_config: Path, shop_swagger_path: Path) -> None:
        result = runner.invoke(
            app,
            ["-q", "convert", str(shop_swagger_path), "-a", "api", "--format", "json"],
        )
        assert result.exit_code == 0, result.output
        configs = json.loads(result.stdout)
        assert configs[0]["functions"]["getUsers"]["handler"] == "handler.getUsers"

    def test_flags_reach_the_pipeline(
        self, isolated_config: Path, shop_swagger_path: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "-q",
                "convert",
                str(shop_swagger_path),
                "-a",
                "api",
                "-s",
                "shop",
                "--options-method",
                "--authorizer",
                '{"name": "auth"}',
            ],
        )
        assert result.exit_code == 0, result.output
        configs = list(yaml.safe_load_all(result.stdout))
        users = configs[0]
        assert users["service"] == "shop-users"
        assert "optionsUsers" in users["functions"]
        http = users["functions"]["getUsers"]["events"][0]["http"]
        assert http["cors"] is True
        assert http["authorizer"] == {"name": "auth"}

    def test_writes_output_dir(
        self, isolated_config: Path, shop_swagger_path: Path
    ) -> None:
        out = isolated_config / "serverless"
        result = runner.invoke(
            app, ["convert", str(shop_swagger_path), "-a", "api", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["user-orders.yml", "users.yml"]
        users = yaml.safe_load((out / "users.yml").read_text())
        assert list(users["functions"])[0] == "getUsers"
        assert "Wrote 2 service config(s)" in result.output

    def test_discovers_swagger_yaml(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(app, ["-q", "convert", "-a", "api"])
        assert result.exit_code == 0, result.output
        assert "service: users" in result.stdout

    def test_reads_stdin(self, isolated_config: Path, shop_swagger_path: Path) -> None:
        result = runner.invoke(
            app,
            ["-q", "convert", "-", "-a", "api"],
            input=shop_swagger_path.read_text(encoding="utf-8"),
        )
        assert result.exit_code == 0, result.output
        assert "getUsersWithUseId" in result.stdout

    def test_multiple_inputs(
        self,
        isolated_config: Path,
        shop_swagger_path: Path,
        catalog_openapi_path: Path,
    ) -> None:
        result = runner.invoke(
            app,
            [
                "-q",
                "convert",
                str(catalog_openapi_path),
                str(shop_swagger_path),
                "-a",
                "api",
                "--base-path",
            ],
        )
        assert result.exit_code == 0, result.output
        services = [c["service"] for c in yaml.safe_load_all(result.stdout)]
        assert services == ["products", "product-reviews", "users", "user-orders"]

    def test_project_config_file(self, swagger_in_cwd: Path) -> None:
        (swagger_in_cwd.parent / "oas2sls.json").write_text(
            json.dumps({"apiPrefix": "api", "operationId": True, "format": "json"})
        )
        result = runner.invoke(app, ["-q", "convert"])
        assert result.exit_code == 0, result.output
        configs = json.loads(result.stdout)
        assert list(configs[0]["functions"])[:2] == ["listUsers", "createUser"]

    def test_env_prefix(
        self, swagger_in_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OAS2SLS_API_PREFIX", "api")
        result = runner.invoke(app, ["-q", "convert"])
        assert result.exit_code == 0, result.output
        assert "service: users" in result.stdout

    def test_no_matching_operations(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(app, ["convert", "-a", "public"])
        assert result.exit_code == 0
        assert "No operations tagged with prefix 'public' found." in result.output


class TestConvertErrors:
    def test_missing_api_prefix(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(app, ["convert"])
        assert result.exit_code == 1
        assert "No API tag prefix configured" in result.output

    def test_no_swagger_file(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["convert", "-a", "api"])
        assert result.exit_code == 4
        assert "Cannot find swagger file" in result.output

    def test_unparseable_document(self, isolated_config: Path) -> None:
        (isolated_config / "swagger.yaml").write_text("name: not-an-api\n")
        result = runner.invoke(app, ["convert", "-a", "api"])
        assert result.exit_code == 7
        assert "Missing 'swagger' or 'openapi' field" in result.output

    def test_unknown_format(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(app, ["convert", "-a", "api", "--format", "toml"])
        assert result.exit_code == 2
        assert "Unknown output format" in result.output

    def test_unwritable_output_dir(self, swagger_in_cwd: Path) -> None:
        blocker = swagger_in_cwd.parent / "blocker"
        blocker.write_text("")
        result = runner.invoke(
            app, ["convert", "-a", "api", "-o", str(blocker / "out")]
        )
        assert result.exit_code == 1
        assert "Failed to write configs" in result.output


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_plain_table(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(app, ["-q", "--plain", "inspect", "-a", "api"])
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "Service\tFunction\tMethod\tPath"
        assert "users\tgetUsers\tGET\t/users" in lines
        assert (
            "user-orders\tgetOrdersWithUseIdOrdSta\tGET\t"
            "/users/{userId}/orders/{orderStatus}"
        ) in lines

    def test_json_rows_per_event(self, swagger_in_cwd: Path) -> None:
        result = runner.invoke(
            app, ["-q", "--json", "inspect", "-a", "api", "--function-name", "app"]
        )
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert len(rows) == 5
        assert {row["Function"] for row in rows} == {"app"}
        assert [row["Method"] for row in rows if row["Service"] == "users"] == [
            "GET",
            "POST",
            "GET",
            "DELETE",
        ]

    def test_error_exit_code(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["inspect", "-a", "api"])
        assert result.exit_code == 4


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


class TestMain:
    def test_oas2sls_error_exit_code(self) -> None:
        with patch("oas2sls.app._setup_signal_handlers"), patch(
            "oas2sls.app.app", side_effect=SpecParseError("broken")
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 7

    def test_unexpected_error_writes_crash_log(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("oas2sls.app._setup_signal_handlers"), patch(
            "oas2sls.app.app", side_effect=RuntimeError("boom")
        ), patch("oas2sls.config.get_data_dir", return_value=tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        logs = list((tmp_path / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "RuntimeError: boom" in logs[0].read_text()
        assert "Unexpected error" in capsys.readouterr().err

    def test_keyboard_interrupt(self) -> None:
        with patch("oas2sls.app._setup_signal_handlers"), patch(
            "oas2sls.app.app", side_effect=KeyboardInterrupt
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130
