from strategy_advisor.agent.unwrap import try_parse_json, unwrap_response


def test_content_envelope_is_unwrapped():
    assert unwrap_response('{"content":"Buy index funds."}') == "Buy index funds."


def test_plain_text_is_returned_unchanged():
    assert unwrap_response("Plain text, not JSON") == "Plain text, not JSON"


def test_raw_text_is_trimmed():
    assert unwrap_response("  Max out your 401(k).\n") == "Max out your 401(k)."


def test_empty_content_falls_back_to_raw_text():
    raw = '{"content": ""}'
    assert unwrap_response(raw) == raw


def test_object_without_content_falls_back_to_raw_text():
    raw = '{"answer": "Rebalance yearly."}'
    assert unwrap_response(raw) == raw


def test_non_object_json_falls_back_to_raw_text():
    assert unwrap_response("42") == "42"
    assert unwrap_response('["a", "b"]') == '["a", "b"]'


def test_text_blocks_are_joined():
    raw = '{"content": [{"type": "text", "text": "First."}, {"type": "text", "text": "Second."}]}'
    assert unwrap_response(raw) == "First.\n\nSecond."


def test_empty_input():
    assert unwrap_response("") == ""
    assert unwrap_response(None) == ""


def test_try_parse_json_returns_none_on_failure():
    assert try_parse_json("{not json") is None
    assert try_parse_json('{"a": 1}') == {"a": 1}


def test_deeply_nested_json_falls_back_to_raw_text():
    raw = "[" * 100000
    assert try_parse_json(raw) is None
    assert unwrap_response(raw) == raw
