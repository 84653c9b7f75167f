"""Compiled-in topic catalogue for the SVT news sections.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# The crawler walks a fixed list of sections.  National sections come
# first, then ``sport``, ``vader`` and ``kultur``, then one topic per
# regional newsroom under ``nyheter/lokalt/``.  Each topic is stored
# under its *storage name* (the last path segment), so
# ``nyheter/lokalt/stockholm`` lands in ``data/svt-<year>/stockholm/``.
#
# All helpers are pure lookups; nothing here performs I/O.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

LOCAL_AREAS: tuple[str, ...] = (
    "blekinge",
    "dalarna",
    "gavleborg",
    "halland",
    "helsingborg",
    "jamtland",
    "jonkoping",
    "norrbotten",
    "skane",
    "smaland",
    "stockholm",
    "sodertalje",
    "sormland",
    "uppsala",
    "varmland",
    "vast",
    "vasterbotten",
    "vasternorrland",
    "vastmanland",
    "orebro",
    "ost",
)

NATIONAL_TOPICS: tuple[str, ...] = (
    "nyheter/ekonomi",
    "nyheter/granskning",
    "nyheter/inrikes",
    "nyheter/svtforum",
    "nyheter/nyhetstecken",
    "nyheter/vetenskap",
    "nyheter/konsument",
    "nyheter/utrikes",
    "sport",
    "vader",
    "kultur",
)

TOPICS: tuple[str, ...] = NATIONAL_TOPICS + tuple(
    f"nyheter/lokalt/{area}" for area in LOCAL_AREAS
)

# Swedish display names used by the summary printer.  Storage names
# missing from this table are displayed as-is.
DISPLAY_NAMES: dict[str, str] = {
    "blekinge": "Blekinge",
    "dalarna": "Dalarna",
    "gavleborg": "Gävleborg",
    "granskning": "uppdrag granskning",
    "halland": "Halland",
    "helsingborg": "Helsingborg",
    "jamtland": "Jämtland",
    "jonkoping": "Jönköping",
    "norrbotten": "Norrbotten",
    "nyhetstecken": "nyheter teckenspråk",
    "orebro": "Örebro",
    "ost": "Öst",
    "skane": "Skåne",
    "smaland": "Småland",
    "sodertalje": "Södertälje",
    "sormland": "Sörmland",
    "stockholm": "Stockholm",
    "uppsala": "Uppsala",
    "vader": "väder",
    "varmland": "Värmland",
    "vast": "Väst",
    "vasterbotten": "Västerbotten",
    "vasternorrland": "Västernorrland",
    "vastmanland": "Västmanland",
}


def topic_storage_name(topic: str) -> str:
    """Return the storage name (last path segment) of *topic*."""
    return topic.rstrip("/").split("/")[-1]


def is_local_area(storage_name: str) -> bool:
    return storage_name in LOCAL_AREAS


def display_name(storage_name: str) -> str:
    return DISPLAY_NAMES.get(storage_name, storage_name)
