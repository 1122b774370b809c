from parsers import SectionHeading, extract_sections


def test_plain_colon_headings():
    text = (
        "Strengths: clear\n"
        "Areas for Improvement: depth\n"
        "Missed Points: caching\n"
        "Follow-up: Why?\n"
        "Ideal Response: Use a cache."
    )
    assert extract_sections(text) == {
        "strengths": "clear",
        "improvements": "depth",
        "missed_points": "caching",
        "follow_up": "Why?",
        "ideal_response": "Use a cache.",
    }


def test_markdown_headings_are_consumed():
    text = "## Strengths\n- Good\n\n### Areas for Improvement\n- Better"
    sections = extract_sections(text)
    assert sections["strengths"] == "- Good"
    assert sections["improvements"] == "- Better"


def test_bold_and_numbered_headings():
    text = "1. **Strengths**: fast\n2. **Key Points Missed:** indexes\n**Follow-up:** **Why?**"
    sections = extract_sections(text)
    assert sections["strengths"] == "fast"
    assert sections["missed_points"] == "indexes"
    # emphasis opening the body belongs to the body
    assert sections["follow_up"] == "**Why?**"


def test_heading_variants_and_case():
    text = "STRENGTHS:\nok\nfollow up question: next?\nModel Answer:\nanswer"
    sections = extract_sections(text)
    assert sections["strengths"] == "ok"
    assert sections["follow_up"] == "next?"
    assert sections["ideal_response"] == "answer"


def test_absent_sections_are_left_out():
    sections = extract_sections("Score: 4\nStrengths: good")
    assert sections == {"strengths": "good"}
    assert extract_sections("") == {}


def test_heading_words_inside_prose_are_ignored():
    text = "Strengths: you showed your strengths in design\nand improvements were noted"
    sections = extract_sections(text)
    assert sections == {
        "strengths": "you showed your strengths in design\nand improvements were noted"
    }


def test_section_stops_at_any_later_heading():
    text = "Strengths: a\nIdeal Response: b"
    sections = extract_sections(text)
    assert sections["strengths"] == "a"
    assert sections["ideal_response"] == "b"


def test_ideal_response_runs_to_end_of_text():
    text = "Ideal Response:\nline one\n\nStrengths: not a boundary for the last section"
    sections = extract_sections(text)
    assert sections["ideal_response"] == (
        "line one\n\nStrengths: not a boundary for the last section"
    )


def test_custom_heading_table():
    headings = (
        SectionHeading("strengths", ("Pros",)),
        SectionHeading("improvements", ("Cons",)),
    )
    sections = extract_sections("Pros: quick\nCons: vague\nStrengths: ignored", headings)
    assert sections == {"strengths": "quick", "improvements": "vague\nStrengths: ignored"}


def test_colon_headings_after_sentence_punctuation():
    text = "Score: 4/5. Strengths: clear answer. Areas for Improvement: mention edge cases."
    assert extract_sections(text) == {
        "strengths": "clear answer.",
        "improvements": "mention edge cases.",
    }


def test_heading_with_qualifier_before_colon():
    text = "**Strengths of your answer:**\n- Clear\n**Areas for Improvement in design:** add caching"
    sections = extract_sections(text)
    assert sections["strengths"] == "- Clear"
    assert sections["improvements"] == "add caching"


def test_mid_line_heading_needs_a_colon():
    text = "Strengths: solid. Improvements were minor overall"
    assert extract_sections(text) == {"strengths": "solid. Improvements were minor overall"}
