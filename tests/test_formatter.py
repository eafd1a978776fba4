"""Tests for rewrite.formatter."""

import pytest

from article_optimizer.rewrite.formatter import (
    REFERENCES_DISCLOSURE,
    append_references,
    build_prompt,
    parse_response,
)
from article_optimizer.rewrite.models import ReferenceCitation

from conftest import make_article, make_reference


class TestBuildPrompt:
    def test_includes_original_article(self) -> None:
        prompt = build_prompt(make_article(), [make_reference()])

        assert "expert content optimizer" in prompt
        assert "Title: Chatbots Guide" in prompt
        assert "Content: Original body about chatbots." in prompt
        assert "URL: https://blog.example.com/chatbots-guide" in prompt
        assert "Minimum 800 words" in prompt

    def test_one_block_per_reference(self) -> None:
        refs = [
            make_reference(),
            make_reference(title="Reference Two", url="https://two.example.com/post", headings=[]),
        ]
        prompt = build_prompt(make_article(), refs)

        assert "### Reference Article 1: Reference One" in prompt
        assert "Headings: Intro, Benefits" in prompt
        assert "### Reference Article 2: Reference Two" in prompt
        assert "URL: https://two.example.com/post" in prompt
        assert "Headings: N/A" in prompt

    def test_dollar_signs_in_article_are_kept(self) -> None:
        article = make_article(description="Plans start at $5 and $premium tiers.")
        prompt = build_prompt(article, [make_reference(content="Costs $$ per $user")])

        assert "Plans start at $5 and $premium tiers." in prompt
        assert "Costs $$ per $user" in prompt

    def test_requires_output_shape(self) -> None:
        prompt = build_prompt(make_article(), [make_reference()])
        assert "TITLE:" in prompt
        assert "CONTENT:" in prompt


class TestParseResponse:
    def test_title_and_content(self) -> None:
        parsed = parse_response("TITLE: New Headline\nCONTENT:\nBody text here")
        assert parsed.title == "New Headline"
        assert parsed.body == "Body text here"

    def test_markers_are_case_insensitive(self) -> None:
        parsed = parse_response("title:  Lower Case  \ncontent:  Body ")
        assert parsed.title == "Lower Case"
        assert parsed.body == "Body"

    def test_title_on_same_line_as_content(self) -> None:
        parsed = parse_response("TITLE: Inline CONTENT: The body")
        assert parsed.title == "Inline"
        assert parsed.body == "The body"

    def test_missing_title(self) -> None:
        parsed = parse_response("Some preamble\nCONTENT:\n## Heading\n\nParagraph.")
        assert parsed.title is None
        assert parsed.body == "## Heading\n\nParagraph."

    def test_title_on_line_after_marker(self) -> None:
        parsed = parse_response("TITLE:\nNew Headline\nCONTENT:\nBody")
        assert parsed.title == "New Headline"
        assert parsed.body == "Body"

    def test_blank_lines_around_title(self) -> None:
        parsed = parse_response("TITLE:\n\n  Spaced Headline  \n\nCONTENT:\nBody")
        assert parsed.title == "Spaced Headline"

    def test_empty_title_is_treated_as_missing(self) -> None:
        parsed = parse_response("TITLE:\nCONTENT:\nBody")
        assert parsed.title is None
        assert parsed.body == "Body"

    def test_missing_content_uses_whole_response(self) -> None:
        raw = "TITLE: Ignored\nJust an article without markers."
        parsed = parse_response(raw)
        assert parsed.title is None
        assert parsed.body == raw

    def test_empty_response(self) -> None:
        parsed = parse_response("")
        assert parsed.title is None
        assert parsed.body == ""


class TestAppendReferences:
    def test_single_reference(self) -> None:
        parsed = parse_response("TITLE: New Headline\nCONTENT:\nBody text here")
        body = append_references(parsed.body, [ReferenceCitation("Ref", "http://x")])

        assert body.startswith("Body text here\n\n---\n\n## References\n\n")
        assert REFERENCES_DISCLOSURE in body
        assert body.endswith("1. [Ref](http://x)\n")
        assert body.count("](http://x)") == 1

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_numbering_in_input_order(self, count) -> None:
        refs = [ReferenceCitation(f"R{i}", f"https://r{i}.example.com") for i in range(count)]
        body = append_references("Body", refs)

        lines = [line for line in body.splitlines() if line[:1].isdigit()]
        assert lines == [f"{i + 1}. [R{i}](https://r{i}.example.com)" for i in range(count)]

    def test_idempotent(self) -> None:
        refs = [ReferenceCitation("A", "https://a.com"), ReferenceCitation("B", "https://b.com")]
        assert append_references("Body", refs) == append_references("Body", refs)

    def test_accepts_extracted_content(self) -> None:
        body = append_references("Body", [make_reference()])
        assert "1. [Reference One](https://ref.example.com/blog/one)" in body

    def test_no_references_leaves_body_unchanged(self) -> None:
        assert append_references("Body", []) == "Body"
