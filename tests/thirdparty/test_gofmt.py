import shutil

import pytest

from gobindgen.thirdparty import GoFmt, check_all_requirements
from gobindgen.thirdparty import gofmt as gofmt_module


def test_missing_gofmt_is_reported(monkeypatch):
    monkeypatch.setattr(gofmt_module.shutil, "which", lambda _: None)
    assert GoFmt.check_requirements() == ["gofmt"]
    assert check_all_requirements() == ["gofmt"]


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt is not installed")
def test_gofmt_formats_in_place(tmp_path):
    path = tmp_path / "bindings.go"
    path.write_text("package clang\nfunc  f( ) {\n}\n")
    GoFmt(str(path)).format()
    assert path.read_text() == "package clang\n\nfunc f() {\n}\n"


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt is not installed")
def test_gofmt_rejects_invalid_code(tmp_path):
    path = tmp_path / "broken.go"
    path.write_text("package clang\nfunc {\n")
    with pytest.raises(OSError):
        GoFmt(str(path)).format()
