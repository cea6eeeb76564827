"""User actions: annotate, rewrite, inspire, block actions and free questions.

Each action reads what it needs from the document, awaits at most one
completion, and then makes at most one edit. Any failure is raised
before the edit, so the document is either fully updated or untouched.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .config import Settings
from .core.annotations import append_annotations, find_annotation_line, parse_annotations
from .core.context import LINES_AFTER, LINES_BEFORE, gather_surrounding_context
from .core.instructions import extract_instruction
from .core.lines import extract_markdown_prefix, is_list_item
from .core.mutate import replace_paragraph_and_remove_annotations, replace_paragraph_with_inspiration
from .core.paragraphs import find_paragraph_bounds, find_paragraph_bounds_near, get_paragraph_text
from .core.ports import CompletionClient, Document
from .errors import EmptyCompletionResult, UserInputAbsent
from .format.bullets import format_inspire_response
from .prompts.templates import (
    block_action_prompt,
    build_action_prompt,
    developer_prompt,
    inspire_prompt,
)

logger = logging.getLogger(__name__)

QUICK_ACTIONS: tuple[str, ...] = ("translate", "example", "expand", "eli5")

DEFAULT_NOTE_NAME = "Glossa response"
_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|#^\[\]]')


@dataclass
class RewriteResult:
    start_line: int
    text: str
    annotations: list[str]


@dataclass
class InspireResult:
    start_line: int
    paragraph: str
    bullets: list[str]


def response_note_name(query: str) -> str:
    """Filename stem for a saved answer, derived from the question."""
    name = _UNSAFE_FILENAME.sub("", query)
    name = re.sub(r"\s+", " ", name).strip()[:60]
    return name or DEFAULT_NOTE_NAME


class Assistant:
    """
    Runs the actions against a document with one completion client.
    """

    def __init__(
        self,
        client: CompletionClient,
        settings: Settings,
        system_prompt: str | None = None,
        context_before: int = LINES_BEFORE,
        context_after: int = LINES_AFTER,
    ):
        self.client = client
        self.settings = settings
        self.system_prompt = system_prompt or developer_prompt(settings.response_language)
        self.context_before = context_before
        self.context_after = context_after

    def annotate(self, doc: Document, line_index: int, items: Iterable[str]) -> list[str]:
        """
        Attach annotations to the paragraph containing line_index. Outside a
        paragraph they go right below line_index itself. Returns the items
        that were written, trimmed and without blanks.
        """
        cleaned = [item.strip() for item in items if item.strip()]
        if not cleaned:
            raise UserInputAbsent("Nothing to annotate.")

        bounds = find_paragraph_bounds(doc, line_index)
        end_line = bounds.end_line if bounds else line_index
        append_annotations(doc, end_line, cleaned)
        logger.info("Annotated line %d with %s", end_line, cleaned)
        return cleaned

    async def rewrite(self, doc: Document, line_index: int) -> RewriteResult:
        """
        Rewrite a paragraph so it takes in its annotations, then drop the
        annotation line. The markdown prefix is kept out of the prompt and
        put back on the result.
        """
        bounds = find_paragraph_bounds_near(doc, line_index)
        if bounds is None:
            raise UserInputAbsent("Place your cursor in a paragraph.")

        annotation_line = find_annotation_line(doc, bounds.end_line)
        if annotation_line is None:
            raise UserInputAbsent("No annotations found. Add annotations first.")

        annotations = parse_annotations(doc.get_line(annotation_line))
        if not annotations:
            raise UserInputAbsent("Annotation line is empty.")

        paragraph = get_paragraph_text(doc, bounds.start_line, bounds.end_line)
        split = extract_markdown_prefix(paragraph)

        user_prompt = build_action_prompt("rewrite", split.content, ", ".join(annotations))
        logger.info("Rewriting lines %d-%d", bounds.start_line, bounds.end_line)
        rewritten = await self.client.complete(
            block_action_prompt(self.settings.response_language), user_prompt
        )
        rewritten = rewritten.strip()
        if not rewritten:
            raise EmptyCompletionResult()

        new_text = split.prefix + rewritten
        replace_paragraph_and_remove_annotations(
            doc, bounds.start_line, bounds.end_line, annotation_line, new_text
        )
        return RewriteResult(start_line=bounds.start_line, text=new_text, annotations=annotations)

    async def inspire(self, doc: Document, line_index: int) -> InspireResult:
        """
        Follow the {instruction} embedded in a paragraph: remove it and add
        the model's ideas as bullets under the paragraph, nested when the
        paragraph is a list item.
        """
        bounds = find_paragraph_bounds(doc, line_index)
        if bounds is None:
            raise UserInputAbsent("Place your cursor in a paragraph.")

        paragraph = get_paragraph_text(doc, bounds.start_line, bounds.end_line)
        found = extract_instruction(paragraph)
        if found is None:
            raise UserInputAbsent("No {instruction} found in this paragraph.")

        split = extract_markdown_prefix(found.cleaned_text)
        indent = len(split.prefix) if is_list_item(found.cleaned_text) else 0

        context = gather_surrounding_context(
            doc, bounds.start_line, bounds.end_line, self.context_before, self.context_after
        )
        user_prompt = build_action_prompt(
            "inspire", split.content, found.instruction, context=context
        )
        logger.info("Inspiring lines %d-%d: %s", bounds.start_line, bounds.end_line, found.instruction)
        response = await self.client.complete(
            inspire_prompt(self.settings.response_language), user_prompt
        )

        bullets = format_inspire_response(response, indent)
        if not bullets:
            raise EmptyCompletionResult()

        replace_paragraph_with_inspiration(
            doc, bounds.start_line, bounds.end_line, found.cleaned_text, bullets
        )
        return InspireResult(start_line=bounds.start_line, paragraph=found.cleaned_text, bullets=bullets)

    async def block_action(self, text: str, action: str, prompt: str | None = None) -> str:
        """
        Run a quick action (translate, example, expand, eli5) or a question
        ("ask") on a block of text. Nothing is written to the document.
        """
        if not text.strip():
            raise UserInputAbsent("Select some text first.")

        if action == "ask":
            if not (prompt or "").strip():
                raise UserInputAbsent("Please enter a question.")
            system = self.system_prompt
        elif action in QUICK_ACTIONS:
            system = block_action_prompt(self.settings.response_language)
        else:
            raise ValueError(f"Not a block action: {action}")

        user_prompt = build_action_prompt(
            action, text, prompt, translate_language=self.settings.translate_language
        )
        response = (await self.client.complete(system, user_prompt)).strip()
        if not response:
            raise EmptyCompletionResult()
        return response

    async def ask(self, query: str) -> str:
        """Answer a free question with the developer prompt."""
        query = query.strip()
        if not query:
            raise UserInputAbsent("Please enter a question.")
        response = (await self.client.complete(self.system_prompt, query)).strip()
        if not response:
            raise EmptyCompletionResult()
        return response
