"""Tests for request keyword matching."""

import pytest

from skillrouter.models.detection import ProjectType
from skillrouter.routing.matcher import match_skill, normalize, phrase_in
from skillrouter.skills.models import Skill


@pytest.mark.parametrize(
    "phrase,text,expected",
    [
        ("hook", "Write a custom hooks file", True),
        ("react", "Is preact faster?", False),
        ("vue", "migrate from vuex", False),
        ("server component", "Server-Components everywhere", True),
        ("next.js", "upgrading next.js 14", True),
        ("use client", "where do I put 'use client'?", True),
        ("cache", "caches", True),
        ("form", "format the date", False),
        ("", "anything", False),
    ],
)
def test_phrase_in(phrase, text, expected):
    assert phrase_in(phrase, text) is expected


def test_normalize():
    assert normalize("  Fix   the\nReact  HOOK ") == "fix the react hook"


class TestMatchSkill:
    @pytest.fixture
    def skill(self):
        return Skill(
            name="react-query",
            triggers=["react query", "usequery", "cache"],
            skip_when=["swr", "project:vue"],
        )

    def test_score_counts_distinct_triggers(self, skill):
        match = match_skill(skill, "React Query cache for useQuery hooks")

        assert match.score == 3
        assert match.matched_triggers == ["react query", "usequery", "cache"]
        assert match.skip_reason is None
        assert match.selected

    def test_no_match(self, skill):
        match = match_skill(skill, "center a div")

        assert match.score == 0
        assert not match.selected

    def test_skip_phrase_wins_over_triggers(self, skill):
        match = match_skill(skill, "react query or swr?")

        assert match.score == 1
        assert match.skip_reason == "request mentions 'swr'"
        assert not match.selected

    def test_skip_by_project_type(self, skill):
        match = match_skill(skill, "cache this", [ProjectType.VUE])
        assert match.skip_reason == "project type is vue"

    def test_project_type_strings(self, skill):
        match = match_skill(skill, "cache this", ["vue"])
        assert match.skip_reason == "project type is vue"

    def test_skip_conditions_ignored_without_match(self, skill):
        assert match_skill(skill, "swr docs").skip_reason is None

    def test_always_skill_selected_without_keywords(self):
        skill = Skill(name="liquid", triggers=["liquid"], always=True)

        match = match_skill(skill, "hello")

        assert match.score == 0
        assert match.selected
