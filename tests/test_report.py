# File: tests/test_report.py
import json

from conftest import make_hole, make_reply
from woodpecker.hole import HoleSet, ReplySet
from woodpecker.report import render_html, render_json, summarize


def hole_records():
    payload = {
        "code": 0,
        "timestamp": 1653983358,
        "data": [make_hole(1), make_hole(2, type="image", url="p.jpeg", text="<b>bold</b>"), make_hole(3)],
    }
    return HoleSet.from_json(json.dumps(payload)).to_records()


def test_render_json_array_and_lines(tmp_path):
    records = hole_records()
    array = render_json(records, tmp_path / "a" / "holes.json", pretty=True)
    assert json.loads(array.read_text(encoding="utf-8")) == records

    lines = render_json(records, tmp_path / "holes.jsonl", pretty=True)
    parsed = [json.loads(line) for line in lines.read_text(encoding="utf-8").splitlines()]
    assert parsed == records


def test_summarize():
    summary = summarize(hole_records())
    assert summary["total"] == 3
    assert summary["kinds"] == {"image": 1, "text": 2}
    assert summary["first_snapshot"] == summary["last_snapshot"] == "2022-05-31T07:49:18+00:00"
    assert summarize([]) == {"total": 0, "kinds": {}, "first_snapshot": None, "last_snapshot": None}


def test_render_html_escapes_text(tmp_path):
    html = render_html(hole_records(), None, tmp_path / "r.html", title="Feed").read_text(encoding="utf-8")
    assert "<title>Feed</title>" in html
    assert "3 record(s) · 1 image · 2 text" in html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "image: p.jpeg" in html


def test_render_html_replies_and_custom_template(tmp_path):
    replies = ReplySet.from_json(json.dumps({"code": 0, "data": [make_reply(5, 9, "[洞主] hi", islz=1)]}))
    html = render_html(replies.to_records(), None, tmp_path / "r.html").read_text(encoding="utf-8")
    assert "hole #9" in html
    assert "(dz)" in html

    tpl_dir = tmp_path / "tpl"
    tpl_dir.mkdir()
    (tpl_dir / "records.html.j2").write_text("{{ summary.total }}:{{ title }}", encoding="utf-8")
    out = render_html(replies.to_records(), tpl_dir, tmp_path / "custom.html", title="T")
    assert out.read_text(encoding="utf-8") == "1:T"
