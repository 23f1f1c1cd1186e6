"""Page service: ordered page list, page records and appearance settings.

Storage layout (one flat key-value namespace)::

    pages:list        comma-joined page ids, in display order
    note:<id>         page content
    title:<id>        page title, written once at creation
    bg:pc, bg:mobile  background image URLs
    opacity:<name>    panel opacity as a string float

The store has no multi-key transactions. A page spans three keys, so the
list and the per-page keys are only loosely coupled: listed pages may have no
content key and deleted pages may leave content behind if a write fails
halfway. Readers fall back to defaults instead of failing.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, overload

from edgenotes.exceptions import PageValidationError, ProtectedPageError, SettingValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from edgenotes.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_ID = "page1"
PAGE_LIST_KEY = "pages:list"
PAGE_ID_PREFIX = "page_"
MAX_PAGE_NAME_LENGTH = 20

BACKGROUND_KEYS = ("bg:pc", "bg:mobile")
OPACITY_DEFAULTS: dict[str, float] = {
    "card": 0.28,
    "article": 0.28,
    "sidebar": 0.22,
    "editor": 0.25,
}
OPACITY_MIN = 0.05
OPACITY_MAX = 0.95
OPACITY_FALLBACK = 0.1

_PAGE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def note_key(page_id: str) -> str:
    return f"note:{page_id}"


def title_key(page_id: str) -> str:
    return f"title:{page_id}"


def opacity_key(name: str) -> str:
    return f"opacity:{name}"


def require_valid_page_id(page_id: str) -> str:
    """Reject page ids that could not have been produced by this service."""
    if not _PAGE_ID_PATTERN.match(page_id):
        raise PageValidationError("Invalid page ID")
    return page_id


def normalize_page_name(name: object) -> str:
    """Trim a new page name and cap it at ``MAX_PAGE_NAME_LENGTH`` characters."""
    if not isinstance(name, str):
        raise PageValidationError("Page name must be a string")
    title = name.strip()[:MAX_PAGE_NAME_LENGTH]
    if not title:
        raise PageValidationError("Page name is required")
    return title


def clamp_opacity(value: object) -> float:
    """Coerce user input to an opacity in [OPACITY_MIN, OPACITY_MAX].

    Non-numeric, NaN and zero inputs become ``OPACITY_FALLBACK``.
    """
    number = 0.0
    if not isinstance(value, bool):
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            number = 0.0
    if math.isnan(number) or number == 0:
        number = OPACITY_FALLBACK
    return min(max(number, OPACITY_MIN), OPACITY_MAX)


def _now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


class PageList(Sequence[str]):
    """Ordered, duplicate-free page ids that always include the default page.

    Only ``parse`` and ``serialize`` know about the stored comma-joined form.
    Instances are never mutated; ``appended`` and ``removed`` return copies.
    """

    def __init__(self, page_ids: Iterable[str] = ()) -> None:
        ids: list[str] = []
        for raw in page_ids:
            page_id = raw.strip()
            if page_id and page_id not in ids:
                ids.append(page_id)
        if DEFAULT_PAGE_ID not in ids:
            ids.insert(0, DEFAULT_PAGE_ID)
        self._ids = ids

    @classmethod
    def parse(cls, raw: str | None) -> PageList:
        """Decode the stored value. Absent or blank values give ``[page1]``."""
        return cls(raw.split(",") if raw else ())

    def serialize(self) -> str:
        return ",".join(self._ids)

    def appended(self, page_id: str) -> PageList:
        if page_id in self._ids:
            raise PageValidationError(f"Page {page_id} already exists")
        return PageList([*self._ids, page_id])

    def removed(self, page_id: str) -> PageList:
        if page_id == DEFAULT_PAGE_ID:
            raise ProtectedPageError("Cannot delete default page")
        return PageList(p for p in self._ids if p != page_id)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        return self._ids[index]

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self._ids

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PageList):
            return self._ids == other._ids
        if isinstance(other, list):
            return self._ids == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PageList({self._ids!r})"


@dataclass(frozen=True)
class Page:
    """A page as seen by readers.

    ``title`` is fixed at creation. ``content`` changes on every save and
    never touches the page list. Only create and delete rewrite
    ``pages:list``, each as a read-modify-write that can lose a concurrent
    update.
    """

    id: str
    title: str
    content: str


class PageStore:
    """Pages and appearance settings on top of a ``KeyValueStore``."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], int] | None = None) -> None:
        self._store = store
        self._clock = clock or _now_ms

    # -- page list ---------------------------------------------------------

    async def list_pages(self) -> PageList:
        return PageList.parse(await self._store.get(PAGE_LIST_KEY))

    async def _save_page_list(self, pages: PageList) -> None:
        await self._store.put(PAGE_LIST_KEY, pages.serialize())

    # -- page records ------------------------------------------------------

    async def get_page(self, page_id: str, default: str = "") -> str:
        """Return page content; a missing key is not an error."""
        content = await self._store.get(note_key(page_id))
        return default if content is None else content

    async def get_title(self, page_id: str) -> str:
        """Return the page title, falling back to the id itself."""
        return await self._store.get(title_key(page_id)) or page_id

    async def get_page_record(self, page_id: str) -> Page:
        return Page(
            id=page_id,
            title=await self.get_title(page_id),
            content=await self.get_page(page_id),
        )

    async def list_page_records(self) -> list[Page]:
        return [await self.get_page_record(page_id) for page_id in await self.list_pages()]

    def _new_page_id(self, pages: PageList) -> str:
        # Millisecond timestamps only collide within one process when two
        # creates land in the same millisecond; step past taken ids.
        stamp = self._clock()
        page_id = f"{PAGE_ID_PREFIX}{stamp}"
        while page_id in pages:
            stamp += 1
            page_id = f"{PAGE_ID_PREFIX}{stamp}"
        return page_id

    async def create_page(self, name: object) -> str:
        """Append a new empty page titled ``name`` and return its id."""
        title = normalize_page_name(name)
        pages = await self.list_pages()
        page_id = self._new_page_id(pages)
        await self._save_page_list(pages.appended(page_id))
        await self._store.put(note_key(page_id), "")
        await self._store.put(title_key(page_id), title)
        logger.info("Created page %s", page_id)
        return page_id

    async def delete_page(self, page_id: str) -> None:
        """Remove a page from the list and drop its keys. Idempotent."""
        if page_id == DEFAULT_PAGE_ID:
            raise ProtectedPageError("Cannot delete default page")
        pages = await self.list_pages()
        if page_id in pages:
            await self._save_page_list(pages.removed(page_id))
        await self._store.delete(note_key(page_id))
        await self._store.delete(title_key(page_id))
        logger.info("Deleted page %s", page_id)

    async def save_page(self, page_id: str, content: str | None) -> None:
        """Overwrite page content. The id does not have to be listed."""
        await self._store.put(note_key(page_id), content or "")

    # -- appearance settings -----------------------------------------------

    async def get_background_images(self) -> dict[str, str]:
        return {
            "pc": await self._store.get("bg:pc") or "",
            "mobile": await self._store.get("bg:mobile") or "",
        }

    async def save_background_image(self, key: object, url: str | None) -> None:
        if key not in BACKGROUND_KEYS:
            raise SettingValidationError("Unknown background key")
        await self._store.put(str(key), url or "")

    async def get_opacity_settings(self) -> dict[str, float]:
        settings: dict[str, float] = {}
        for name, default in OPACITY_DEFAULTS.items():
            raw = await self._store.get(opacity_key(name))
            try:
                value = float(raw) if raw else default
            except ValueError:
                logger.warning("Ignoring malformed stored opacity for %s", name)
                value = default
            settings[name] = default if math.isnan(value) else value
        return settings

    async def save_opacity_setting(self, key: object, value: object) -> float:
        """Clamp and persist one opacity; returns the stored value."""
        if not isinstance(key, str) or key not in OPACITY_DEFAULTS:
            raise SettingValidationError("Unknown opacity key")
        opacity = clamp_opacity(value)
        await self._store.put(opacity_key(key), str(opacity))
        return opacity
