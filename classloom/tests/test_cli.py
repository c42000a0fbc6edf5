"""Tests for the command-line entry point."""

import json

import pytest

from classloom.__main__ import main
from classloom.setting import get_settings


SHOP_FILES = {
    "Order.java": '''
package com.shop;

public class Order extends Entity {
    private final List<LineItem> items;
}
''',
    "LineItem.java": '''
package com.shop;

public class LineItem extends Entity {
    private int quantity;
}
''',
    "Entity.java": '''
package com.shop;

public abstract class Entity {
    protected long id;
}
''',
}


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.delenv("CLASSLOOM_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def shop_dir(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    for name, text in SHOP_FILES.items():
        (src / name).write_text(text, encoding="utf-8")
    return src


class TestCli:
    def test_extract_json(self, shop_dir, capsys):
        assert main(["--log-level", "WARNING", "extract", str(shop_dir), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [t["name"] for t in data] == ["Entity", "LineItem", "Order"]
        assert data[0]["is_abstract"] is True

    def test_extract_summary(self, shop_dir, capsys):
        assert main(["--log-level", "WARNING", "extract", str(shop_dir / "Order.java")]) == 0
        assert "com.shop.Order" in capsys.readouterr().out

    def test_analyze_clean(self, shop_dir, capsys):
        assert main(["--log-level", "WARNING", "analyze", str(shop_dir), "--name", "shop"]) == 0
        out = capsys.readouterr().out
        assert "Diagram 'shop': 3 classifier(s), 3 relationship(s) from 3 file(s)" in out

    def test_analyze_reports_issues(self, tmp_path, capsys):
        src = tmp_path / "cyclic"
        src.mkdir()
        (src / "A.java").write_text("class A extends B {}", encoding="utf-8")
        (src / "B.java").write_text("class B extends A {}", encoding="utf-8")

        assert main(["--log-level", "WARNING", "analyze", str(src)]) == 1
        assert "Inheritance cycle detected" in capsys.readouterr().out

    def test_analyze_save(self, shop_dir, capsys):
        assert main(["--log-level", "WARNING", "analyze", str(shop_dir), "--save"]) == 0
        assert "Saved as " in capsys.readouterr().out

    def test_generate(self, shop_dir, tmp_path, capsys):
        out = tmp_path / "generated"
        assert main(["--log-level", "WARNING", "generate", str(shop_dir), str(out)]) == 0
        assert (out / "com" / "shop" / "Order.java").is_file()
        text = (out / "com" / "shop" / "Order.java").read_text(encoding="utf-8")
        assert "public class Order extends Entity {" in text

    def test_generate_into_file_fails(self, shop_dir, tmp_path, capsys):
        target = tmp_path / "file.txt"
        target.write_text("x")
        assert main(["--log-level", "WARNING", "generate", str(shop_dir), str(target)]) == 2
        assert "not a usable directory" in capsys.readouterr().err

    def test_plantuml(self, shop_dir, capsys):
        assert main(["--log-level", "WARNING", "plantuml", str(shop_dir)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("@startuml")
        assert "--|>" in out

    def test_missing_path(self, tmp_path, capsys):
        assert main(["--log-level", "WARNING", "analyze", str(tmp_path / "missing")]) == 2
        assert "Cannot read source input" in capsys.readouterr().err

    def test_extract_directory_uses_namespace(self, tmp_path, capsys):
        src = tmp_path / "loose"
        src.mkdir()
        (src / "Plain.java").write_text("class Plain {}", encoding="utf-8")

        assert main(["--log-level", "WARNING", "extract", str(src), "--namespace", "com.loose", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["namespace"] == "com.loose"

    def test_invalid_configured_log_level(self, shop_dir, monkeypatch, capsys):
        monkeypatch.setenv("CLASSLOOM_LOG_LEVEL", "loud")
        assert main(["extract", str(shop_dir)]) == 2
        assert "invalid configuration" in capsys.readouterr().err
