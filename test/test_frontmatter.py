"""Tests for the skill file front-matter codec."""

from pathlib import Path

from skills.frontmatter import build_frontmatter, parse_frontmatter
from skills.types import Skill


def _skill(**kwargs) -> Skill:
    return Skill(name="blog-post", path=Path("/tmp/blog-post.md"), **kwargs)


class TestParseFrontmatter:
    """Tests for parse_frontmatter."""

    def test_without_frontmatter_whole_text_is_body(self):
        text = "Just a prompt.\nSecond line."
        fields, body = parse_frontmatter(text)
        assert fields == {}
        assert body == text

    def test_parses_known_fields_and_body(self):
        text = "---\ndescription: Draft a blog post\nargument-hint: [topic] [tone]\n---\n\nWrite it."
        fields, body = parse_frontmatter(text)
        assert fields == {"description": "Draft a blog post", "argument-hint": "[topic] [tone]"}
        assert body == "Write it."

    def test_unterminated_frontmatter_degrades_to_body(self):
        text = "---\ndescription: never closed\n\nBody text"
        fields, body = parse_frontmatter(text)
        assert fields == {}
        assert body == text

    def test_splits_on_first_colon_only(self):
        fields, _ = parse_frontmatter("---\ndescription: Ratio 1:2: keep all\n---\nx")
        assert fields["description"] == "Ratio 1:2: keep all"

    def test_skips_lines_without_colon_and_empty_keys(self):
        text = "---\njust words\n\n: orphan value\nmodel: fast\n---\nbody"
        fields, body = parse_frontmatter(text)
        assert fields == {"model": "fast"}
        assert body == "body"

    def test_keys_and_values_are_trimmed(self):
        fields, _ = parse_frontmatter("---\n  description  :   spaced out   \n---\n")
        assert fields == {"description": "spaced out"}

    def test_first_line_must_be_exactly_three_hyphens(self):
        text = "----\ndescription: x\n---\nbody"
        fields, body = parse_frontmatter(text)
        assert fields == {}
        assert body == text

    def test_body_may_contain_delimiter_lines(self):
        text = "---\ndescription: a\n---\n\nbefore\n---\nafter"
        fields, body = parse_frontmatter(text)
        assert fields == {"description": "a"}
        assert body == "before\n---\nafter"

    def test_crlf_line_endings(self):
        text = "---\r\ndescription: windows\r\n---\r\n\r\nbody\r\n"
        fields, body = parse_frontmatter(text)
        assert fields == {"description": "windows"}
        assert body == "body"

    def test_empty_text(self):
        assert parse_frontmatter("") == ({}, "")


class TestBuildFrontmatter:
    """Tests for build_frontmatter."""

    def test_full_document(self):
        skill = _skill(description="Draft a post", argument_hint="[topic]", body="Write.")
        assert build_frontmatter(skill) == (
            "---\ndescription: Draft a post\nargument-hint: [topic]\n---\n\nWrite."
        )

    def test_empty_fields_still_emit_block(self):
        skill = _skill(body="Only a body")
        assert build_frontmatter(skill) == "---\n---\n\nOnly a body"

    def test_only_hint(self):
        skill = _skill(argument_hint="<file>", body="b")
        assert build_frontmatter(skill) == "---\nargument-hint: <file>\n---\n\nb"

    def test_body_is_written_verbatim(self):
        body = "  indented\n\n- list\n"
        assert build_frontmatter(_skill(body=body)).endswith("\n\n" + body)


class TestRoundTrip:
    """parse followed by build for recognized fields."""

    def test_reproduces_recognized_lines(self):
        original = "---\ndescription: Summarize a PR\nargument-hint: [pr-number]\n---\n\nRead the PR."
        fields, body = parse_frontmatter(original)
        rebuilt = build_frontmatter(
            _skill(
                description=fields["description"],
                argument_hint=fields["argument-hint"],
                body=body,
            )
        )
        assert rebuilt == original

    def test_unknown_keys_are_dropped(self):
        fields, body = parse_frontmatter("---\ndescription: d\nallowed-tools: Bash\n---\n\nx")
        rebuilt = build_frontmatter(_skill(description=fields["description"], body=body))
        assert "allowed-tools" not in rebuilt
        assert parse_frontmatter(rebuilt) == ({"description": "d"}, "x")
