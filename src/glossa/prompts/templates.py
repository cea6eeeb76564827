"""Prompt templates for the block actions and the system prompts."""

import re
from typing import Literal

from ..languages import DEFAULT_RESPONSE_LANGUAGE, LANGUAGE_NAMES

BlockAction = Literal["translate", "example", "expand", "eli5", "ask", "rewrite", "inspire"]

BLOCK_ACTIONS: tuple[str, ...] = (
    "translate",
    "example",
    "expand",
    "eli5",
    "ask",
    "rewrite",
    "inspire",
)

DEFAULT_TRANSLATE_LANGUAGE = "Chinese"

LANGUAGE_TAG = "<language></language>"
_LANGUAGE_TAG_LINE = re.compile(r"^[ \t]*" + re.escape(LANGUAGE_TAG) + r"[ \t]*\n?", re.MULTILINE)

DEVELOPER_PROMPT = """You are a knowledgeable assistant that provides deep, thorough explanations.

<language></language>
<response_approach>
- Start with a clear, direct answer or definition
- Then explain the "why" and "how" behind it
- Include relevant examples, edge cases, and practical implications
- Connect to broader context when it aids understanding
- Cover the topic completely; assume the user wants to truly understand, not just get a quick answer
</response_approach>

<structure>
- Lead with the core concept (1-2 sentences)
- Expand with supporting details and mechanisms
- Add examples or analogies where helpful
- Note important exceptions or nuances
- Use headers (##) for distinct subtopics
</structure>

<formatting>
- Use Markdown **only where semantically correct** (e.g., `inline code`, ```code fences```, lists, tables)
- Use backticks to format file, directory, function, and class names
- Use $ for inline math and $$ for block math. NEVER use \\( \\) or \\[ \\] delimiters.
- NEVER use numbered lists (1, 2, 3). If sequence matters, use letters (a, b, c) instead
</formatting>

<avoid>
- Repetition (don't restate the same point differently)
- Filler phrases and unnecessary hedging
- Artificial padding for simple topics
</avoid>"""

ATOMIC_PROMPT = """You are a concise assistant that produces atomic, self-contained notes.

<language></language>
<response_approach>
- Give one clear, focused answer per question
- Each response should stand alone as a complete thought
- Prefer brevity over thoroughness; omit what isn't essential
</response_approach>

<structure>
- Lead with the key insight (1 sentence)
- Add 1-2 supporting details if needed
- No headers unless the topic has genuinely distinct parts
</structure>

<formatting>
- Use Markdown **only where semantically correct** (e.g., `inline code`, ```code fences```)
- Use backticks to format file, directory, function, and class names
- Use $ for inline math and $$ for block math. NEVER use \\( \\) or \\[ \\] delimiters.
- NEVER use numbered lists (1, 2, 3). If sequence matters, use letters (a, b, c) instead
</formatting>

<avoid>
- Long explanations when a short one suffices
- Repetition and filler phrases
- Headers and bullet lists for simple answers
</avoid>"""

BLOCK_ACTION_PROMPT = """You transform or answer questions about a given text block.

<language></language>
<rules>
- Output plain text only: no markdown, no bullet points, no numbered lists, no headers
- No preamble ("Here's the translation:", "Sure!", etc.); start directly with the result
- Keep responses focused and concise: typically 1-3 sentences for questions, similar length to input for transformations
- Match the tone of the original text
</rules>"""

INSPIRE_PROMPT = """You expand on an idea by providing related insights as bullet points.

<language></language>
<rules>
- Output 2-5 bullet points, each starting with "- "
- Each bullet should be 1-2 sentences: a concise, standalone insight
- No preamble, no headers, no numbered lists, no closing remarks
- Start directly with the first bullet
- Each bullet should add a distinct angle, not repeat the same idea
</rules>"""

REWRITE_TEMPLATE = (
    "Rewrite this text, incorporating the highlighted phrases naturally. "
    "If a phrase is in a different language, INSERT each highlighted phrase in parentheses "
    "immediately after the most relevant word/phrase in the text. "
    "Prioritize natural integration, but if no coherent or logical placement exists for a phrase, "
    "append it at the end of the text rather than forcing an awkward insertion. "
    "Phrases to incorporate: {phrases}. Text: {text}"
)


def language_directive(lang: str) -> str:
    return f"Always respond in {LANGUAGE_NAMES.get(lang, lang)}."


def apply_language_directive(template: str, lang: str) -> str:
    """
    Fill the <language></language> placeholder of a template.

    The default language needs no directive, so the placeholder is removed
    (with its line when it stands alone). Any other language gets the
    directive sentence in its place.
    """
    if lang == DEFAULT_RESPONSE_LANGUAGE:
        return _LANGUAGE_TAG_LINE.sub("", template).replace(LANGUAGE_TAG, "")
    return template.replace(LANGUAGE_TAG, language_directive(lang))


def prepend_language_directive(prompt: str, lang: str) -> str:
    """Put the directive ahead of a prompt that has no placeholder."""
    if lang == DEFAULT_RESPONSE_LANGUAGE:
        return prompt
    return f"{language_directive(lang)}\n\n{prompt}"


def localize_prompt(prompt: str, lang: str) -> str:
    """Use the placeholder when the prompt has one, else prepend."""
    if LANGUAGE_TAG in prompt:
        return apply_language_directive(prompt, lang)
    return prepend_language_directive(prompt, lang)


def developer_prompt(lang: str) -> str:
    return apply_language_directive(DEVELOPER_PROMPT, lang)


def block_action_prompt(lang: str) -> str:
    return apply_language_directive(BLOCK_ACTION_PROMPT, lang)


def inspire_prompt(lang: str) -> str:
    return apply_language_directive(INSPIRE_PROMPT, lang)


def build_action_prompt(
    action: str,
    block_text: str,
    prompt: str | None = None,
    translate_language: str | None = None,
    context: str | None = None,
) -> str:
    """
    Build the user prompt for a block action.

    Args:
        action: One of BLOCK_ACTIONS
        block_text: Text the action works on (trimmed here)
        prompt: Question, phrases or instruction, depending on the action
        translate_language: Target of "translate" (default Chinese)
        context: Surrounding document text, used by "inspire"

    Returns:
        The finished prompt
    """
    text = block_text.strip()
    extra = (prompt or "").strip()

    if action == "translate":
        language = translate_language or DEFAULT_TRANSLATE_LANGUAGE
        return f"Translate into {language}:\n\n{text}"
    if action == "example":
        return f"Give one concrete example of this:\n\n{text}"
    if action == "expand":
        return f"Expand on this with more detail:\n\n{text}"
    if action == "eli5":
        return f"Explain this like I'm five:\n\n{text}"
    if action == "rewrite":
        return REWRITE_TEMPLATE.format(phrases=extra, text=text)
    if action == "ask":
        return f'Text: "{text}"\n\nQuestion: {extra}'
    if action == "inspire":
        result = f'Text: "{text}"'
        if context:
            result += f"\n\nDocument context:\n{context}"
        result += f"\n\nInstruction: {extra}"
        return result

    raise ValueError(f"Unknown block action: {action}")
