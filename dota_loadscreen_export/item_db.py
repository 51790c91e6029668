"""Item definitions read from scripts/items/items_game.txt."""
import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional

from .constants import ITEMS_GAME_PATH, ITEMS_KEY, RESERVED_KEYS, FIELD_KEYS
from .errors import ParseError
from .tokenizer import BraceOpen, BraceClose, KeyValue, Scalar, Line, classify_line

log = logging.getLogger(__name__)

ItemPredicate = Callable[["DotaItem"], bool]


@dataclass(frozen=True)
class DotaItem:
    """One item definition. ``type`` is the item's prefab, ``path`` its asset."""
    id: int = 0
    name: str = ""
    type: str = ""
    path: str = ""

    def __str__(self):
        return f"{self.name}|{self.path}"


@dataclass(frozen=True)
class BuilderState:
    """Item builder state between two lines.

    ``depth`` 0 means no item is open. ``pending_id`` is the id read from the
    scalar line preceding an item's opening brace.
    """
    depth: int = 0
    item: Optional[DotaItem] = None
    pending_id: int = 0
    aborted: bool = False


def isolate_collection(lines: Iterable[str], key: str = ITEMS_KEY) -> list[str]:
    """Return the non-blank lines inside the collection named ``key``.

    The line after the key (the collection's opening brace) is skipped and
    lines are taken until the collection's closing brace.
    """
    it = iter(lines)
    for line in it:
        if line.strip() == key:
            break
    else:
        raise ParseError(f"Collection {key} not found")
    next(it, None)

    depth = 0
    collected = []
    for line in it:
        stripped = line.strip()
        if not stripped:
            continue
        if stripped == "{":
            depth += 1
        elif stripped == "}":
            depth -= 1
        if depth < 0:
            break
        collected.append(line)
    return collected


def _parse_id(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParseError("Item id is not numeric", value) from None


def step(state: BuilderState, line: Line) -> tuple[BuilderState, Optional[DotaItem]]:
    """Advance the builder by one classified line.

    Returns the new state and the item closed by this line, if any.
    """
    if isinstance(line, BraceOpen):
        depth = state.depth + 1
        if depth == 1:
            return BuilderState(depth, DotaItem(id=state.pending_id)), None
        return replace(state, depth=depth), None

    if isinstance(line, BraceClose):
        depth = state.depth - 1
        if depth < 0:
            return replace(state, depth=depth, aborted=True), None
        if depth == 0:
            return BuilderState(), state.item
        return replace(state, depth=depth), None

    if isinstance(line, Scalar):
        # Keys of nested blocks are not item ids
        if state.depth > 0:
            return state, None
        if line.value in RESERVED_KEYS:
            return replace(state, pending_id=0), None
        return replace(state, pending_id=_parse_id(line.value)), None

    if isinstance(line, KeyValue):
        field_name = FIELD_KEYS.get(line.key)
        if state.depth < 1 or state.item is None or field_name is None:
            return state, None
        return replace(state, item=replace(state.item, **{field_name: line.value})), None

    raise TypeError(f"Unexpected line kind {line!r}")


def read_items(lines: Iterable[str], predicate: ItemPredicate) -> list[DotaItem]:
    """Fold the lines of an items collection into the items matching predicate."""
    state = BuilderState()
    items = []
    for raw in lines:
        state, closed = step(state, classify_line(raw))
        if state.aborted:
            log.debug("Items collection closed early, stopping")
            break
        if closed is not None and predicate(closed):
            items.append(closed)
    return items


def parse_items(blob: bytes, predicate: ItemPredicate) -> list[DotaItem]:
    """Parse the raw items_game.txt contents."""
    text = blob.decode("ascii", errors="replace")
    return read_items(isolate_collection(text.splitlines()), predicate)


def get_items(archive, predicate: ItemPredicate) -> list[DotaItem]:
    """Read items_game.txt from the archive and return the matching items."""
    items = parse_items(archive.read_entry(ITEMS_GAME_PATH), predicate)
    log.debug(f"Parsed {len(items)} matching items from {ITEMS_GAME_PATH}")
    return items
