"""
Test Secure Prompt Manager Module

This module tests prompt building for question generation and interview feedback,
and the sanitization applied to user data before it reaches a prompt.

Dependencies:
- pytest: For testing framework
- app.core.secure_prompt_manager: The module being tested
- app.schemas.generation_schemas: For test data models
"""

import pytest
from app.core.secure_prompt_manager import (
    SecurePromptManager,
    PromptTemplate,
    sanitize_text,
    format_qa_pairs,
    EMPTY_ANSWER_PLACEHOLDER,
)
from app.schemas.generation_schemas import GenerationRequest, FeedbackRequest, InterviewType

class TestSanitizeText:
    """Test the sanitize_text function."""

    def test_sanitize_normal_text(self):
        assert sanitize_text("  Backend Engineer  ") == "Backend Engineer"

    def test_sanitize_keeps_html_verbatim(self):
        """Prompts are plain text, so markup is passed through unchanged."""
        assert sanitize_text("R&D <lead>") == "R&D <lead>"

    def test_sanitize_control_characters(self):
        result = sanitize_text("Hello\x00\x01\x02World\nNext")
        assert result == "HelloWorld\nNext"

    def test_sanitize_strips_whitespace_left_by_control_characters(self):
        assert sanitize_text("\x01 Backend Engineer \x7f") == "Backend Engineer"

    def test_sanitize_length_limit(self):
        assert len(sanitize_text("A" * 2000)) == 1000
        assert len(sanitize_text("A" * 2000, max_length=50)) == 50

    def test_sanitize_none_input(self):
        with pytest.raises(ValueError, match="Text cannot be None"):
            sanitize_text(None)

    def test_sanitize_empty_after_cleaning(self):
        with pytest.raises(ValueError, match="Text cannot be empty after sanitization"):
            sanitize_text(" \x00 ")

class TestPromptTemplate:
    """Test the PromptTemplate class."""

    def test_template_rendering(self):
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        assert template.render(name="John", role="developer") == "Hello John, you are a developer."

    def test_template_missing_placeholder(self):
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        with pytest.raises(ValueError, match="Missing required placeholders"):
            template.render(name="John")

    def test_template_unknown_key_ignored(self):
        template = PromptTemplate(template="Hello {name}.", placeholders={"name": "User's name"})
        assert template.render(name="John", malicious_key="injection") == "Hello John."

    def test_braces_in_values_are_not_template_fields(self):
        template = PromptTemplate(template="Role: {role}", placeholders={"role": "Role"})
        assert template.render(role="{question_count} engineer") == "Role: {question_count} engineer"

    def test_per_placeholder_length_limit(self):
        template = PromptTemplate(
            template="{text}",
            placeholders={"text": "Text"},
            sanitization_config={"text": {"max_length": 5}},
        )
        assert template.render(text="abcdefgh") == "abcde"

class TestSecurePromptManager:
    """Test the SecurePromptManager class."""

    def setup_method(self):
        self.manager = SecurePromptManager()
        self.generation_request = GenerationRequest(
            role="Backend Engineer",
            interview_type=InterviewType.TECHNICAL,
            experience_years="2-3",
            question_count=3,
        )

    def test_question_prompt_contains_request_values(self):
        prompt = self.manager.build_question_prompt(self.generation_request)

        assert "Backend Engineer" in prompt
        assert "Technical" in prompt
        assert "2-3" in prompt
        assert "Generate 3 " in prompt
        assert "JSON array of strings" in prompt

    def test_question_prompt_is_deterministic(self):
        first = self.manager.build_question_prompt(self.generation_request)
        second = SecurePromptManager().build_question_prompt(self.generation_request.model_copy())
        assert first == second

    def test_feedback_prompt_lists_numbered_pairs(self):
        request = FeedbackRequest(
            role="Data Analyst",
            interview_type=InterviewType.BEHAVIORAL,
            questions=["Tell me about a conflict.", "Why this role?"],
            answers=["I mediated between two teams.", "I enjoy data."],
        )
        prompt = self.manager.build_feedback_prompt(request)

        assert "Data Analyst position (Behavioral interview)" in prompt
        assert "1. Question: Tell me about a conflict.\n   Answer: I mediated between two teams." in prompt
        assert "2. Question: Why this role?\n   Answer: I enjoy data." in prompt
        # Output format is requested with literal braces, not template fields
        assert '"overallScore": number' in prompt
        assert '"betterAnswer": "improved answer"' in prompt

    def test_feedback_prompt_is_deterministic(self):
        request = FeedbackRequest(
            role="SRE",
            interview_type=InterviewType.MIXED,
            questions=["What is an SLO?"],
            answers=["A target for reliability."],
        )
        assert self.manager.build_feedback_prompt(request) == self.manager.build_feedback_prompt(request)

    def test_unknown_template(self):
        with pytest.raises(ValueError, match="Unknown prompt template"):
            self.manager.get_template("system_prompt")

class TestFormatQaPairs:

    def test_empty_answer_uses_placeholder(self):
        block = format_qa_pairs(["What is REST?"], ["   "])
        assert block == f"1. Question: What is REST?\n   Answer: {EMPTY_ANSWER_PLACEHOLDER}"

    def test_pairs_are_separated_by_blank_line(self):
        block = format_qa_pairs(["Q1", "Q2"], ["A1", "A2"])
        assert block == "1. Question: Q1\n   Answer: A1\n\n2. Question: Q2\n   Answer: A2"
