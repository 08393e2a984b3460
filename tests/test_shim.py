# File: tests/test_shim.py
import json

import pytest
from conftest import make_hole, make_page, make_reply
from woodpecker.shim import (
    ShimSyntaxError,
    parse_holes,
    parse_holes_from_api,
    parse_replies,
    parse_replies_from_api,
)


def test_parse_holes_from_api_keeps_input_order():
    records = parse_holes_from_api(json.dumps(make_page([5, 2, 9])))
    assert [r["entry"]["id"] for r in records] == [5, 2, 9]
    assert records[0]["entry"]["kind"] == {"type": "text"}
    assert records[0]["snapshot"] == "2022-05-31T07:49:18+00:00"


def test_parse_holes_accepts_exported_entries():
    exported = parse_holes_from_api(json.dumps({"code": 0, "data": [make_hole(1, type="image", url="a.jpeg")]}))
    assert parse_holes(json.dumps(exported)) == exported


def test_parse_replies_from_api():
    payload = {"code": 0, "data": {"data": [make_reply(3, 1, "[洞主] ok", islz="1"), make_reply(4, 1, "no")]}}
    records = parse_replies_from_api(json.dumps(payload))
    assert [(r["entry"]["id"], r["entry"]["text"], r["entry"]["dz"]) for r in records] == [
        (3, "ok", True),
        (4, "no", False),
    ]
    assert parse_replies(json.dumps(records)) == records


@pytest.mark.parametrize(
    "func,text",
    [
        (parse_holes, "not json"),
        (parse_holes, json.dumps({"entry": {}})),
        (parse_holes_from_api, json.dumps({"data": []})),
        (parse_replies, json.dumps([{"entry": {"id": 1}, "snapshot": "x"}])),
        (parse_replies_from_api, "[]"),
    ],
)
def test_malformed_input_raises(func, text):
    with pytest.raises(ShimSyntaxError):
        func(text)
    # callers treating it as a plain ValueError keep working
    with pytest.raises(ValueError):
        func(text)


def test_out_of_range_timestamp_raises_syntax_error():
    payload = {"code": 0, "data": [make_hole(1, timestamp="9" * 25)]}
    with pytest.raises(ShimSyntaxError):
        parse_holes_from_api(json.dumps(payload))
