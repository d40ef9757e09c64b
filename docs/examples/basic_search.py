"""Minimal Searchbase session against a local engine.

Run with ``SEARCHBASE_INDEX``, ``SEARCHBASE_URL`` and ``SEARCHBASE_DATA_FIELD``
set (or a ``.env`` file next to this script)::

    python docs/examples/basic_search.py "harry potter"
"""
from __future__ import annotations

import asyncio
import sys
from typing import Any, Mapping

from searchbase import ApplyOptions, Searchbase, StateChange
from searchbase.observability.logging import JsonLoggerFactory


def print_results(changes: Mapping[str, StateChange]) -> None:
    results = changes["results"].next
    print(f"{results.total} hits in {results.time} ms")
    for hit in results:
        print(" -", hit.get("_id"), {k: v for k, v in hit.items() if not k.startswith("_")})


def print_error(prev: Any) -> None:
    print("search failed (previous error was %r)" % (prev,))


async def main(value: str) -> None:
    JsonLoggerFactory.configure("info")
    async with Searchbase.from_env(".env", on_error=print_error) as sb:
        sb.subscribe_to_state_changes(print_results, "results")
        await sb.set_size(5, ApplyOptions(trigger_query=False))
        await sb.set_value(value)
        if sb.error is not None:
            print(sb.error.to_dict())


if __name__ == "__main__":
    asyncio.run(main(" ".join(sys.argv[1:]) or "harry"))
