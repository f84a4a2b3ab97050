"""Line-oriented adapter between the match harness and ``DecisionEngine``.

The harness talks over stdin/stdout, one command per line:

    settings field_width 19
    settings your_botid 0
    update game field .,.,x,P0,...
    action move 10000

Settings are buffered until the first field update, at which point the engine
is configured. ``action move`` answers with a lowercase direction on stdout;
``action character`` answers with the character name.
"""

import argparse
import sys
from typing import Dict, Iterable, Optional, TextIO

from .config import Config
from .engine import DecisionEngine
from .environment import ConfigurationError, MalformedSnapshotError
from .logging_utils import LOG_TAG_ERROR, LOG_TAG_INFO, log_error, log_info
from .moves import Direction


class BotRunner:
    """Dispatch harness commands to a ``DecisionEngine``."""

    def __init__(
        self,
        engine: Optional[DecisionEngine] = None,
        *,
        out: Optional[TextIO] = None,
        character: str = Config.CHARACTER,
        default_width: int = Config.FIELD_WIDTH,
        default_height: int = Config.FIELD_HEIGHT,
        hazard_radius: int = Config.HAZARD_RADIUS,
    ) -> None:
        self.engine = engine or DecisionEngine()
        self.out = out or sys.stdout
        self.character = character
        self.hazard_radius = hazard_radius
        self.width = default_width
        self.height = default_height
        self.self_id: Optional[int] = None
        self.configured = False
        # Settings and updates the bot does not act on, kept for inspection.
        self.settings: Dict[str, str] = {}
        self.updates: Dict[str, str] = {}
        self._tick_ok = False

    def _write(self, text: str) -> None:
        self.out.write(text + "\n")
        self.out.flush()

    def _ensure_configured(self) -> None:
        if self.configured:
            return
        self_id = self.self_id if self.self_id is not None else 0
        self.engine.configure(
            self.width,
            self.height,
            self_id,
            1 - self_id,
            hazard_radius=self.hazard_radius,
        )
        self.configured = True

    def handle(self, line: str) -> Optional[str]:
        """Process one command line; return whatever was written to ``out``."""
        parts = line.strip().split()
        if not parts:
            return None

        command = parts[0]
        if command == "settings" and len(parts) >= 3:
            self._handle_setting(parts[1], parts[2])
            return None
        if command == "update" and len(parts) >= 4:
            self._handle_update(parts[1], parts[2], " ".join(parts[3:]))
            return None
        if command == "action" and len(parts) >= 2:
            return self._handle_action(parts[1])

        log_info(f"  {LOG_TAG_INFO} [Runner] Ignoring unknown command: {line.strip()}")
        return None

    def _handle_setting(self, key: str, value: str) -> None:
        if key == "field_width":
            self.width = int(value)
        elif key == "field_height":
            self.height = int(value)
        elif key == "your_botid":
            self.self_id = int(value)
        else:
            self.settings[key] = value

    def _handle_update(self, target: str, key: str, value: str) -> None:
        if target == "game" and key == "field":
            self._tick_ok = False
            try:
                self._ensure_configured()
            except ConfigurationError as exc:
                log_error(f"  {LOG_TAG_ERROR} [Runner] Cannot configure the match: {exc}")
                raise
            try:
                self.engine.ingest_snapshot(value)
            except MalformedSnapshotError as exc:
                # Skip the tick; the next field update starts clean.
                log_error(f"  {LOG_TAG_ERROR} [Runner] Dropping malformed field: {exc}")
                return
            self._tick_ok = True
        else:
            self.updates[f"{target} {key}"] = value

    def _handle_action(self, kind: str) -> Optional[str]:
        if kind == "character":
            self._write(self.character)
            return self.character
        if kind != "move":
            log_info(f"  {LOG_TAG_INFO} [Runner] Ignoring unknown action: {kind}")
            return None

        move = Direction.PASS
        if self._tick_ok:
            try:
                move = self.engine.decide_move()
            except MalformedSnapshotError as exc:
                log_error(f"  {LOG_TAG_ERROR} [Runner] Cannot decide this tick: {exc}")
        else:
            log_error(f"  {LOG_TAG_ERROR} [Runner] No usable field for this tick, passing")
        self._write(move.value)
        return move.value

    def run(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.handle(line)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Hack Man bot speaking the line protocol on stdin/stdout")
    parser.add_argument("--verbose", action="store_true", help="Log every decision to stderr")
    parser.add_argument("--debug-distances", action="store_true", help="Dump the distance field every move")
    parser.add_argument("--character", default=Config.CHARACTER, help="Name answered to 'action character'")
    args = parser.parse_args(argv)

    Config.validate()
    engine = DecisionEngine(
        verbose=args.verbose or Config.VERBOSE,
        debug_distances=args.debug_distances or Config.DEBUG_DISTANCES,
    )
    if engine.verbose:
        log_info(Config.display())
    BotRunner(engine, character=args.character).run(sys.stdin)
    return 0
