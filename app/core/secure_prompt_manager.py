"""
Secure Prompt Manager Module

This module builds the instruction strings sent to the generation endpoint. Prompts
are kept as templates with explicit placeholders and every user-provided value is
sanitized before it is injected, so user text can never alter the instructions or
the requested output format.

The module contains:
- PromptTemplate: A dataclass for prompt templates with placeholders
- SecurePromptManager: Builds the question generation and feedback prompts
- sanitize_text: Utility function for text sanitization

Rendering is a pure function of its input: the same request always produces the
same prompt.

Dependencies:
- dataclasses: For template data structures
- typing: For type hints
- app.constants.regex_patterns: For control-character removal
- loguru: For logging truncation warnings
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from loguru import logger
from app.constants.regex_patterns import REGEX_PATTERNS
from app.schemas.generation_schemas.validated_requests import GenerationRequest, FeedbackRequest

EMPTY_ANSWER_PLACEHOLDER = "(no answer provided)"

# Longest values accepted into a prompt. Requests over these limits are rejected
# by the request validator, so role, years and questions always reach the prompt intact.
MAX_ROLE_LENGTH = 200
MAX_YEARS_LENGTH = 50
MAX_QUESTION_LENGTH = 2000
MAX_ANSWER_LENGTH = 5000

def sanitize_text(text: str, max_length: int = 1000) -> str:
    """
    Sanitize text before it is embedded in a prompt.

    Steps:
    1. Removes null bytes and other control characters (newlines and tabs are kept)
    2. Strips leading/trailing whitespace
    3. Truncates to max_length
    4. Drops invalid unicode

    Args:
        text (str): The text to sanitize
        max_length (int): Maximum allowed length (default: 1000)

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    text = REGEX_PATTERNS['control_chars'].sub('', str(text)).strip()

    if len(text) > max_length:
        text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters")

    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text

@dataclass
class PromptTemplate:
    """Prompt template with placeholders for safe data injection."""
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Optional[Dict[str, Dict]] = None  # Per-placeholder sanitization config

    def render(self, **kwargs) -> str:
        """
        Render the template with provided data.

        Args:
            **kwargs: Data to inject into placeholders

        Returns:
            str: Rendered prompt with sanitized data

        Raises:
            ValueError: If required placeholders are missing or data is invalid
        """
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {sorted(missing_placeholders)}")

        sanitized_data = {}
        for key, value in kwargs.items():
            if key not in self.placeholders:
                logger.warning(f"Unknown placeholder key: {key}")
                continue
            config = self.sanitization_config.get(key, {}) if self.sanitization_config else {}
            sanitized_data[key] = sanitize_text(
                str(value),
                max_length=config.get('max_length', 1000),
            )

        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e

class SecurePromptManager:
    """
    Holds the prompt templates used by the generation endpoints.

    User data only ever enters through template placeholders, so braces or
    instructions inside a role name or an answer are treated as plain text.
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        return {
            "question_generation": PromptTemplate(
                template="""
You are an expert interviewer. Generate {question_count} high-quality, diverse, and challenging interview questions for a {role} position.
Interview type: {interview_type}
Years of experience: {experience_years}

- Questions should be relevant to the role and experience level.
- For technical interviews, include a mix of conceptual, practical, and scenario-based questions.
- For behavioral interviews, focus on soft skills, teamwork, and problem-solving.
- For mixed interviews, include both technical and behavioral questions.
- Do NOT include answers, only the questions.
- Return the questions as a JSON array of strings.
""",
                placeholders={
                    "question_count": "Number of questions to generate",
                    "role": "Job role the interview is for",
                    "interview_type": "Technical, Behavioral or Mixed",
                    "experience_years": "Candidate's years of experience",
                },
                sanitization_config={
                    "role": {"max_length": MAX_ROLE_LENGTH},
                    "experience_years": {"max_length": MAX_YEARS_LENGTH},
                },
            ),
            "interview_feedback": PromptTemplate(
                template="""
You are an expert interview evaluator. Analyze the following interview responses for a {role} position ({interview_type} interview).

For each question and answer pair, provide:
1. A score from 0-100 based on relevance, completeness, and technical accuracy
2. A better/alternative answer that demonstrates best practices
3. Specific feedback on what was good and what could be improved

Format your response as a JSON object with this exact structure:
{{
  "overallScore": number (average of all scores),
  "questionFeedback": [
    {{
      "question": "question text",
      "answer": "user's answer",
      "score": number (0-100),
      "betterAnswer": "improved answer",
      "feedback": "detailed feedback"
    }}
  ],
  "overallFeedback": "comprehensive feedback for the entire interview"
}}

Questions and Answers:
{qa_pairs}

Be strict but fair in your evaluation. Focus on technical accuracy, problem-solving approach, and communication clarity.
""",
                placeholders={
                    "role": "Job role the interview is for",
                    "interview_type": "Technical, Behavioral or Mixed",
                    "qa_pairs": "Numbered question/answer block",
                },
                sanitization_config={
                    "role": {"max_length": MAX_ROLE_LENGTH},
                    "qa_pairs": {"max_length": 50000},
                },
            ),
        }

    def get_template(self, name: str) -> PromptTemplate:
        if name not in self._templates:
            raise ValueError(f"Unknown prompt template: {name}")
        return self._templates[name]

    def build_question_prompt(self, request: GenerationRequest) -> str:
        """Build the prompt asking for a JSON array of interview questions."""
        return self.get_template("question_generation").render(
            question_count=request.question_count,
            role=request.role,
            interview_type=request.interview_type.value,
            experience_years=request.experience_years,
        )

    def build_feedback_prompt(self, request: FeedbackRequest) -> str:
        """Build the prompt asking for a scored feedback object."""
        return self.get_template("interview_feedback").render(
            role=request.role,
            interview_type=request.interview_type.value,
            qa_pairs=format_qa_pairs(request.questions, request.answers),
        )

def format_qa_pairs(questions: List[str], answers: List[str]) -> str:
    """
    Render question/answer pairs as a numbered block.

    Example:
        >>> format_qa_pairs(["What is REST?"], ["An architectural style."])
        '1. Question: What is REST?\\n   Answer: An architectural style.'
    """
    pairs = []
    for index, (question, answer) in enumerate(zip(questions, answers), start=1):
        question_text = sanitize_text(question, max_length=MAX_QUESTION_LENGTH)
        try:
            answer_text = sanitize_text(answer or "", max_length=MAX_ANSWER_LENGTH)
        except ValueError:
            answer_text = EMPTY_ANSWER_PLACEHOLDER
        pairs.append(f"{index}. Question: {question_text}\n   Answer: {answer_text}")
    return "\n\n".join(pairs)

secure_prompt_manager = SecurePromptManager()
