import json

from parsers import format_question_markdown, parse_question_response, validate_question_payload


PAYLOAD = {
    "question": "How does a B-tree index speed up lookups?",
    "hints": ["Think about disk pages", "Consider tree height", "Each node holds many keys"],
    "difficulty": "medium",
}


def test_structured_content_wins():
    parsed = parse_question_response("ignored raw text", structured=PAYLOAD)
    assert parsed.question == PAYLOAD["question"]
    assert [h.text for h in parsed.hints] == PAYLOAD["hints"]
    assert parsed.difficulty == "medium"
    assert not any(h.visible for h in parsed.hints)


def test_raw_json_is_parsed():
    parsed = parse_question_response(json.dumps({"question": "Q?", "hints": ["h1"]}))
    assert parsed.question == "Q?"
    assert [h.text for h in parsed.hints] == ["h1"]
    assert parsed.difficulty is None


def test_labeled_blocks():
    raw = "Question: What is TCP?\nHint1: handshake\nHint2: SYN\nHint3: SYN-ACK"
    parsed = parse_question_response(raw)
    assert parsed.question == "What is TCP?"
    assert [h.text for h in parsed.hints] == ["handshake", "SYN", "SYN-ACK"]


def test_unlabeled_text_is_the_question():
    parsed = parse_question_response("Explain eventual consistency.")
    assert parsed.question == "Explain eventual consistency."
    assert parsed.hints == []


def test_json_without_hints_falls_back_to_text():
    raw = json.dumps({"question": "Q?"})
    assert parse_question_response(raw).question == raw


def test_reveal_next_hint():
    parsed = parse_question_response("", structured=PAYLOAD)
    assert parsed.reveal_next_hint().text == "Think about disk pages"
    assert parsed.reveal_next_hint().text == "Consider tree height"
    assert parsed.reveal_next_hint().text == "Each node holds many keys"
    assert parsed.reveal_next_hint() is None


def test_validate_question_payload():
    assert validate_question_payload(json.dumps(PAYLOAD)) == PAYLOAD


def test_validate_rejects_wrong_hint_count_and_bad_json():
    bad = dict(PAYLOAD, hints=["only one"])
    assert validate_question_payload(json.dumps(bad)) is None
    assert validate_question_payload(json.dumps(dict(PAYLOAD, difficulty="extreme"))) is None
    assert validate_question_payload("not json") is None


def test_format_question_markdown():
    assert format_question_markdown("Use the 'SELECT' keyword") == "Use the `SELECT` keyword"
    assert format_question_markdown("Call ‘os.fork’ twice") == "Call `os.fork` twice"
    assert format_question_markdown("Already `'quoted'`") == "Already `'quoted'`"
    assert format_question_markdown("") == ""
