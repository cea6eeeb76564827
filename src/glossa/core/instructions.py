"""Pull {instruction} spans out of paragraph text."""

import re

from .model import Instruction

# Non-greedy and not brace-counting: "{a {b}}" matches "{a {b}".
_INSTRUCTION = re.compile(r"\{([^}]+)\}")


def extract_instruction(text: str) -> Instruction | None:
    """
    Extract the last {instruction} from text.

    Returns the trimmed instruction and the text with that span removed
    (whitespace before the span collapsed, trailing whitespace dropped),
    or None when there is no span or the last one is blank. Earlier spans
    stay in the cleaned text verbatim.
    """
    last = None
    for last in _INSTRUCTION.finditer(text):
        pass

    if last is None:
        return None

    instruction = last.group(1).strip()
    if not instruction:
        return None

    before = text[: last.start()].rstrip()
    after = text[last.end():]
    return Instruction(cleaned_text=(before + after).rstrip(), instruction=instruction)
