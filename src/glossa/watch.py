"""Watch mode for glossa - reload the system prompt when its file changes."""

import json
import logging
import signal
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class DebounceHandler(FileSystemEventHandler):
    """Collects prompt file changes and flushes them in batches."""

    def __init__(self, on_batch: Callable[[set[str]], None], debounce_ms: int = 150):
        super().__init__()
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms

        self.changed: set[str] = set()
        self.last_event_time = 0.0

    def _should_skip(self, path: Path) -> bool:
        name = path.name

        # Hidden, temp and swap files
        if name.startswith(".") or name.endswith("~") or name.endswith(".swp"):
            return True

        return not name.endswith(".md")

    def _record(self, event: FileSystemEvent, attr: str = "src_path") -> None:
        if event.is_directory:
            return
        path = Path(str(getattr(event, attr)))
        if not self._should_skip(path):
            self.changed.add(path.name)
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        self._record(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._record(event)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._record(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._record(event)
        self._record(event, "dest_path")

    def check_and_flush(self) -> None:
        """Flush once the debounce period has elapsed."""
        if not self.changed:
            return
        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        if not self.changed:
            return
        # Events arriving during on_batch land in the new set
        changed, self.changed = self.changed, set()
        if self.on_batch:
            self.on_batch(changed)


def make_reload_handler(runtime: Any, quiet: bool = False, json_output: bool = False) -> Callable[[set[str]], None]:
    """Batch handler that reloads the runtime's prompt when the active file changed."""

    def handle_batch(changed: set[str]) -> None:
        active = runtime.settings.system_prompt_file
        if active not in changed:
            logger.debug("Ignoring prompt changes: %s", sorted(changed))
            return

        used_fallback = runtime.reload_system_prompt()
        if json_output:
            print(json.dumps({"type": "reload", "file": active, "fallback": used_fallback}), flush=True)
        elif not quiet:
            if used_fallback:
                print(f"{active} not found or empty, using default prompt", flush=True)
            else:
                print(f"Reloaded {active}", flush=True)

    return handle_batch


def watch_prompts(
    runtime: Any,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch the prompts folder and reload the system prompt on change.

    Args:
        runtime: Runtime whose prompt should follow the file
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable

    Returns:
        Exit code
    """
    folder = runtime.config.workspace.prompts
    if not folder.exists():
        logger.error("Prompts folder not found: %s", folder)
        return 1

    running = True

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(make_reload_handler(runtime, quiet, json_output), debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(folder), recursive=False)

    if not quiet and not json_output:
        print(f"Watching {folder} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()
    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
