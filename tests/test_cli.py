"""Tests for routebook.cli: entrypoint, service resolution, docs and routes commands."""

import json
import sys
import types
from pathlib import Path

import pytest

from routebook.cli import main
from routebook.cli._resolve import resolve_service
from routebook.service import Service


def list_widgets() -> str:
    return "[]"


def _build_service() -> Service:
    s = Service().path("/api").doc("Widget service")
    s.route(s.get("/widgets").to(list_widgets).operation("ListWidgets"))
    s.route(s.options("/widgets").to(list_widgets))
    return s


@pytest.fixture
def _fake_service_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a Service on sys.modules."""
    mod = types.ModuleType("_fake_routebook_service")
    mod.service = _build_service()  # type: ignore[attr-defined]
    mod.make_service = _build_service  # type: ignore[attr-defined]
    mod.not_a_service = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_routebook_service", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routebook" in capsys.readouterr().out

    def test_docs_missing_service(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["docs"])
        assert exc_info.value.code == 2

    def test_docs_rejects_unknown_format(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["docs", "x:y", "--format", "html"])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_service_module")
class TestResolveService:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_service("_fake_routebook_service:service"), Service)

    def test_default_attribute(self) -> None:
        assert isinstance(resolve_service("_fake_routebook_service"), Service)

    def test_factory(self) -> None:
        service = resolve_service("_fake_routebook_service:make_service")
        assert service.root_path() == "/api"

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_service("nonexistent_module_xyz:service")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_service("_fake_routebook_service:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a routebook\.Service"):
            resolve_service("_fake_routebook_service:not_a_service")


@pytest.mark.usefixtures("_fake_service_module")
class TestDocsCommand:
    def test_markdown_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["docs", "_fake_routebook_service:service"])
        out = capsys.readouterr().out
        assert "# `/api`" in out
        assert "* [ListWidgets](#listwidgets)" in out

    def test_json_to_file(self, tmp_path: Path) -> None:
        target = tmp_path / "api.json"
        main(["docs", "_fake_routebook_service:service", "--format", "json", "-o", str(target)])
        data = json.loads(target.read_text(encoding="utf-8"))
        assert [r["method"] for r in data] == ["GET", "OPTIONS"]

    def test_bad_import_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["docs", "_fake_routebook_service:not_a_service"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_service_module")
class TestRoutesCommand:
    def test_lists_bindings(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_routebook_service:service"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert any(line.split() == ["GET", "/api/widgets", "list_widgets"] for line in lines)
        assert any(line.split() == ["GET", "/api/md", "get_doc_md"] for line in lines)
        assert any(line.split() == ["GET", "/api/health", "get_health"] for line in lines)

    def test_reports_unbound_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_routebook_service:service"])
        assert "1 declared route(s) not bound" in capsys.readouterr().out
