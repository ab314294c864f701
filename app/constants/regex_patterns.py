"""
Description:
This module contains precompiled regex patterns used to clean and split text
replies from the generation endpoint.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.
"""

import re

# Compile regex patterns once for better performance
REGEX_PATTERNS = {
    # null bytes and control characters other than tab, newline and carriage return
    'control_chars': re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]"),
    # <think>...</think> reasoning blocks some models emit before the answer
    'think_block': re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE),
    'think_tag': re.compile(r"</?think[^>]*>", re.IGNORECASE),
    # ``` or ```json fence lines
    'code_fence': re.compile(r"^```[\w-]*$"),
    # "1.", "2)", "(3)", "Q4:", "Question 5." numbering prefixes
    'numbered_prefix': re.compile(r"^(?:\(?\d+[.):]|(?:q|question)\s*\d+\s*[.):\-])\s*", re.IGNORECASE),
    # "-", "*", "•" bullet prefixes
    'bullet_prefix': re.compile(r"^[-*•]\s+"),
    # markdown emphasis wrapping a whole line
    'emphasis': re.compile(r"^(\*\*|__)(.+)\1$"),
}
