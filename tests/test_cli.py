"""Tests for the pricelens command line."""

import json

from pricelens_core import runner
from pricelens_core.cli.main import build_parser, main
from pricelens_core.detection import ProductRecord
from pricelens_core.runner import PassStatus

SNAPSHOT = {
    "url": "https://shop.example.com/c/mice",
    "root": {
        "tag": "body", "text": "", "width": 1280, "height": 4000, "children": [
            {"tag": "div", "text": "Wireless Mouse\n$19.99", "width": 300, "height": 200, "children": [
                {"tag": "img", "attrs": {"src": "a.jpg"}, "width": 120, "height": 120},
                {"tag": "h3", "text": "Wireless Mouse", "width": 250, "height": 24},
                {"tag": "span", "text": "$19.99", "width": 60, "height": 18},
            ]},
        ],
    },
}


def write_snapshot(tmp_path):
    path = tmp_path / "page.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


def test_parser_subcommands():
    parser = build_parser()
    args = parser.parse_args(["detect", "https://shop.example.com", "--format", "json"])
    assert args.url == "https://shop.example.com"
    assert args.format == "json"
    args = parser.parse_args(["capture", "https://shop.example.com"])
    assert args.output == "snapshot.json"


def test_detect_snapshot_writes_text_report(tmp_path, capsys):
    out = tmp_path / "report.txt"
    code = main(["detect", "--snapshot", str(write_snapshot(tmp_path)), "-o", str(out)])
    assert code == 0
    assert out.read_text(encoding="utf-8") == "Title: Wireless Mouse\nImage: a.jpg\nPrice: $19.99\n\n"
    assert "Saved 1 product(s)" in capsys.readouterr().out


def test_detect_default_path_follows_format(tmp_path, monkeypatch):
    snapshot = write_snapshot(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["detect", "--snapshot", str(snapshot), "--format", "json"]) == 0
    data = json.loads((tmp_path / "detected-products.json").read_text(encoding="utf-8"))
    assert data["data"] == [{"title": "Wireless Mouse", "price": "$19.99", "imageUrl": "a.jpg"}]


def test_detect_requires_exactly_one_source(tmp_path, capsys):
    assert main(["detect"]) == 2
    assert main(["detect", "https://x", "--snapshot", str(write_snapshot(tmp_path))]) == 2
    assert "either a URL or --snapshot" in capsys.readouterr().err


def test_detect_failure_exit_code(tmp_path, monkeypatch, capsys):
    async def fake_run_on_url(url, config=None, run_logger=None):
        return PassStatus(ok=False, message="No products were detected.")

    monkeypatch.setattr(runner, "run_on_url", fake_run_on_url)
    monkeypatch.chdir(tmp_path)
    assert main(["detect", "https://shop.example.com"]) == 1
    assert "No products were detected." in capsys.readouterr().err
    assert not (tmp_path / "detected-products.txt").exists()


def test_detect_url_with_run_log(tmp_path, monkeypatch):
    async def fake_run_on_url(url, config=None, run_logger=None):
        run_logger.log_text(f"scanned {url}")
        return PassStatus(ok=True, message="Detected 1 product(s)",
                          records=[ProductRecord("Desk Lamp", "24,99 €", "N/A")])

    monkeypatch.setattr(runner, "run_on_url", fake_run_on_url)
    out = tmp_path / "p.csv"
    logs = tmp_path / "logs"
    code = main(["detect", "https://shop.example.com", "--format", "csv", "-o", str(out), "--log-dir", str(logs)])
    assert code == 0
    assert out.read_text(encoding="utf-8").splitlines()[1] == 'Desk Lamp,"24,99 €",N/A'
    assert any("scanned https://shop.example.com" in p.read_text(encoding="utf-8") for p in logs.glob("run-*.md"))


def test_capture(tmp_path, monkeypatch, capsys):
    async def fake_capture(url, output, config=None):
        return 42

    monkeypatch.setattr(runner, "capture_url", fake_capture)
    assert main(["capture", "https://shop.example.com", "-o", str(tmp_path / "s.json")]) == 0
    assert "42 elements" in capsys.readouterr().out


def test_no_subcommand_prints_help(capsys):
    assert main([]) == 0
    assert "usage: pricelens" in capsys.readouterr().out
