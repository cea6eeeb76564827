"""CLI for glossa - paragraph annotation and AI-assisted rewriting of text files."""

import argparse
import asyncio
import json
import logging
import sys
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any

from . import __version__
from .actions import QUICK_ACTIONS, response_note_name
from .adapters.fs_document import read_document, write_document
from .adapters.line_buffer import LineBuffer
from .config import SETTING_NAMES
from .core.annotations import find_annotation_line, parse_annotations
from .core.context import gather_surrounding_context
from .core.instructions import extract_instruction
from .core.model import Position
from .core.paragraphs import find_paragraph_bounds_near, get_paragraph_text, get_selection_context
from .errors import GlossaError, UserInputAbsent
from .languages import default_translate_language, is_language_conflict
from .prompts.loader import ensure_default_prompts, list_prompt_files, load_prompt_file
from .runtime import build_runtime

logger = logging.getLogger(__name__)


def _line_index(doc: LineBuffer, line: int) -> int:
    """Convert a 1-based line number from the command line to an index."""
    if not 1 <= line <= doc.line_count():
        raise ValueError(f"Line {line} out of range (1..{doc.line_count()})")
    return line - 1


def _load(args: argparse.Namespace) -> tuple[LineBuffer, int]:
    doc = read_document(args.file)
    return doc, _line_index(doc, args.line)


def cmd_bounds(args: argparse.Namespace, rt: Any) -> int:
    """Show the paragraph at a line with its annotations and instruction."""
    doc, index = _load(args)
    bounds = find_paragraph_bounds_near(doc, index)
    if bounds is None:
        print(f"Line {args.line} is not in a paragraph", file=sys.stderr)
        return 1

    text = get_paragraph_text(doc, bounds.start_line, bounds.end_line)
    annotation_line = find_annotation_line(doc, bounds.end_line)
    annotations = parse_annotations(doc.get_line(annotation_line)) if annotation_line is not None else []
    instruction = extract_instruction(text)

    if args.json:
        print(json.dumps({
            "start": bounds.start_line + 1,
            "end": bounds.end_line + 1,
            "annotation_line": annotation_line + 1 if annotation_line is not None else None,
            "annotations": annotations,
            "instruction": instruction.instruction if instruction else None,
            "text": text,
        }, indent=2, ensure_ascii=False))
        return 0

    print(f"Lines {bounds.start_line + 1}-{bounds.end_line + 1}")
    if annotations:
        print(f"Annotations: {', '.join(annotations)}")
    if instruction:
        print(f"Instruction: {instruction.instruction}")
    print(text)
    return 0


def cmd_context(args: argparse.Namespace, rt: Any) -> int:
    """Print the context a model would see for the paragraph at a line."""
    doc, index = _load(args)
    bounds = find_paragraph_bounds_near(doc, index)
    if bounds is None:
        print(f"Line {args.line} is not in a paragraph", file=sys.stderr)
        return 1
    ctx = rt.config.context
    print(gather_surrounding_context(doc, bounds.start_line, bounds.end_line, ctx.before, ctx.after))
    return 0


def cmd_annotate(args: argparse.Namespace, rt: Any) -> int:
    """Add annotations under the paragraph at a line."""
    doc, index = _load(args)
    added = rt.assistant.annotate(doc, index, args.items)
    write_document(args.file, doc)
    if not args.quiet:
        print(f"Added: {', '.join(added)}")
    return 0


def cmd_rewrite(args: argparse.Namespace, rt: Any) -> int:
    """Rewrite the paragraph at a line with its annotations."""
    doc, index = _load(args)
    if not args.quiet:
        print("Rewriting...", file=sys.stderr)
    result = asyncio.run(rt.assistant.rewrite(doc, index))
    write_document(args.file, doc)
    if args.json:
        print(json.dumps({"start": result.start_line + 1, "text": result.text}, ensure_ascii=False))
    elif not args.quiet:
        print(result.text)
    return 0


def cmd_inspire(args: argparse.Namespace, rt: Any) -> int:
    """Follow the {instruction} of the paragraph at a line."""
    doc, index = _load(args)
    result = asyncio.run(rt.assistant.inspire(doc, index))
    write_document(args.file, doc)
    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False))
    elif not args.quiet:
        print(result.paragraph)
        for bullet in result.bullets:
            print(bullet)
    return 0


def cmd_act(args: argparse.Namespace, rt: Any) -> int:
    """Run a block action on a range of lines."""
    doc = read_document(args.file)
    start = _line_index(doc, args.start)
    end = _line_index(doc, args.end)
    doc.set_selection(Position(start, 0), Position(end, len(doc.get_line(end))))

    selection = get_selection_context(doc)
    if selection is None:
        raise UserInputAbsent("Select some text first.")
    response = asyncio.run(rt.assistant.block_action(selection.selected_text, args.action, args.prompt))
    print(response)
    return 0


def cmd_ask(args: argparse.Namespace, rt: Any) -> int:
    """Ask a free question; optionally save the answer as a new file."""
    response = asyncio.run(rt.assistant.ask(args.question))

    if not args.save:
        print(response)
        return 0

    root = rt.config.workspace.root
    base = response_note_name(args.question)
    path = root / f"{base}.md"
    if path.exists():
        path = root / f"{base} {int(time.time() * 1000)}.md"
    write_document(path, LineBuffer.from_text(f"{response}\n"))
    print(path)
    return 0


def cmd_prompts_init(args: argparse.Namespace, rt: Any) -> int:
    written = ensure_default_prompts(rt.config.workspace.prompts)
    if not args.quiet:
        for name in written:
            print(f"Created {name}")
    return 0


def cmd_prompts_list(args: argparse.Namespace, rt: Any) -> int:
    names = list_prompt_files(rt.config.workspace.prompts)
    if args.json:
        print(json.dumps(names))
        return 0
    active = rt.settings.system_prompt_file
    for name in names:
        marker = "*" if name == active else " "
        print(f"{marker} {name}")
    return 0


def cmd_prompts_show(args: argparse.Namespace, rt: Any) -> int:
    if args.name is None:
        print(rt.system_prompt)
        return 0
    content = load_prompt_file(rt.config.workspace.prompts, args.name)
    if content is None:
        print(f"Prompt {args.name} not found or empty", file=sys.stderr)
        return 1
    print(content)
    return 0


def cmd_settings_show(args: argparse.Namespace, rt: Any) -> int:
    data = asdict(rt.settings_store.load())
    if data["api_key"]:
        data["api_key"] = data["api_key"][:3] + "..."
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key}: {value}")
    return 0


def cmd_settings_set(args: argparse.Namespace, rt: Any) -> int:
    if args.key not in SETTING_NAMES:
        raise ValueError(f"Unknown setting: {args.key}")

    settings = rt.settings_store.load()
    value: Any = args.value
    if args.key == "web_search_enabled":
        value = args.value.strip().lower() in ("1", "true", "yes", "on")
    setattr(settings, args.key, value)

    # Translating into the response language is a no-op
    switched = None
    if is_language_conflict(settings.response_language, settings.translate_language):
        if args.key == "translate_language":
            raise ValueError(f"{value} is already the response language")
        switched = default_translate_language(settings.response_language)
        settings.translate_language = switched
    rt.settings_store.save(settings)

    if not args.quiet:
        print(f"{args.key} = {value if args.key != 'api_key' else '***'}")
        if switched:
            print(f"translate_language = {switched}")
    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Watch the prompts folder and reload the system prompt."""
    from .watch import watch_prompts

    return watch_prompts(
        rt,
        debounce_ms=args.debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
    )


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    import uvicorn

    from .api.app import create_app, generate_token

    token = None
    if args.token == "auto":
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif args.token == "none":
        print("Warning: Running without authentication. Only use in trusted environments.")
    else:
        token = args.token

    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Starting server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glossa", description="Annotate and rewrite paragraphs of plain-text notes"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/glossa.toml, workspace/glossa.toml)",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Workspace directory holding .glossa/ (overrides config)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimize output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")
    parser.add_argument("--version", action="version", version=f"glossa {__version__}")

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # paragraph inspection
    for name, help_text in (
        ("bounds", "Show the paragraph at a line"),
        ("context", "Print the surrounding context of a paragraph"),
        ("rewrite", "Rewrite a paragraph using its annotations"),
        ("inspire", "Expand a paragraph following its {instruction}"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file", type=Path, help="Text file")
        sub.add_argument("line", type=int, help="Line number (1-based)")

    parser_annotate = subparsers.add_parser("annotate", help="Add annotations to a paragraph")
    parser_annotate.add_argument("file", type=Path, help="Text file")
    parser_annotate.add_argument("line", type=int, help="Line number (1-based)")
    parser_annotate.add_argument("items", nargs="+", help="Annotations to add")

    parser_act = subparsers.add_parser("act", help="Run a block action on a line range")
    parser_act.add_argument("file", type=Path, help="Text file")
    parser_act.add_argument("start", type=int, help="First line (1-based)")
    parser_act.add_argument("end", type=int, help="Last line (1-based)")
    parser_act.add_argument("action", choices=QUICK_ACTIONS + ("ask",), help="Action to run")
    parser_act.add_argument("--prompt", default=None, help="Question for the ask action")

    parser_ask = subparsers.add_parser("ask", help="Ask a free question")
    parser_ask.add_argument("question", help="Question text")
    parser_ask.add_argument("--save", action="store_true", help="Save the answer as a new file")

    # prompts command
    parser_prompts = subparsers.add_parser("prompts", help="Manage system prompt files")
    prompts_sub = parser_prompts.add_subparsers(dest="prompts_cmd", required=True)
    prompts_sub.add_parser("init", help="Write the default prompt files")
    prompts_sub.add_parser("list", help="List prompt files")
    parser_prompts_show = prompts_sub.add_parser("show", help="Print a prompt")
    parser_prompts_show.add_argument("name", nargs="?", default=None, help="Prompt file (default: active prompt)")

    # settings command
    parser_settings = subparsers.add_parser("settings", help="Show or change settings")
    settings_sub = parser_settings.add_subparsers(dest="settings_cmd", required=True)
    settings_sub.add_parser("show", help="Print settings")
    parser_settings_set = settings_sub.add_parser("set", help="Change a setting")
    parser_settings_set.add_argument("key", help="Setting name")
    parser_settings_set.add_argument("value", help="New value")

    parser_watch = subparsers.add_parser("watch", help="Reload the system prompt when it changes")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )

    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8765,
        help="Port to bind to (default: 8765)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    rt = build_runtime(workspace_path=args.workspace, config_path=args.config)
    level = logging.DEBUG if args.verbose else getattr(logging, rt.config.log.level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if rt.used_fallback_prompt and not args.quiet:
        logger.warning("Using default system prompt")

    handlers = {
        "bounds": cmd_bounds,
        "context": cmd_context,
        "annotate": cmd_annotate,
        "rewrite": cmd_rewrite,
        "inspire": cmd_inspire,
        "act": cmd_act,
        "ask": cmd_ask,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }

    if args.cmd == "prompts":
        prompts_handlers = {
            "init": cmd_prompts_init,
            "list": cmd_prompts_list,
            "show": cmd_prompts_show,
        }
        handler = prompts_handlers.get(args.prompts_cmd)
    elif args.cmd == "settings":
        settings_handlers = {
            "show": cmd_settings_show,
            "set": cmd_settings_set,
        }
        handler = settings_handlers.get(args.settings_cmd)
    else:
        handler = handlers.get(args.cmd)

    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except (GlossaError, ValueError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
