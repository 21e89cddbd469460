"""CLI entry point.

This script drives a `JobStore` from the terminal: fetch listing pages into a
JSON file, bookmark jobs from that listing, and inspect or repair the local
bookmark cache.

Examples:
    python run_fetch.py --out jobs.json
    python run_fetch.py --out jobs.json --pages 3
    python run_fetch.py --bookmark 1234 --bookmark 5678
    python run_fetch.py --list-bookmarks
    python run_fetch.py --verify
    python run_fetch.py --clear

Settings (API base URL, storage directory, keys) come from JOBFINDER_*
environment variables or a .env file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import List, Optional

from jobfinder.config import configure_logging, load_settings
from jobfinder.feedback import ConsoleNotifier
from jobfinder.models import JobRecord
from jobfinder.normalize import salary_display
from jobfinder.store import JobStore


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch job listings and manage offline bookmarks.")
    p.add_argument("--out", type=str, default=None, help="Write the fetched listing to this JSON file.")
    p.add_argument("--pages", type=int, default=1, help="Number of listing pages to fetch.")
    p.add_argument(
        "--bookmark",
        action="append",
        default=[],
        metavar="ID",
        help="Toggle the bookmark for a job id from the fetched listing (repeatable).",
    )
    p.add_argument("--list-bookmarks", action="store_true", help="Print saved bookmarks.")
    p.add_argument("--verify", action="store_true", help="Restore bookmarks from the backup copy if needed.")
    p.add_argument("--clear", action="store_true", help="Remove all bookmarks (asks for confirmation).")
    return p.parse_args(argv)


def _describe(job: JobRecord) -> str:
    return f"{job.id}\t{job.title or '-'}\t{job.company_name or '-'}\t{salary_display(job)}"


async def run(args: argparse.Namespace, store: JobStore) -> int:
    await store.load_bookmarks()

    wants_listing = bool(args.out or args.bookmark)
    if wants_listing:
        await store.fetch_jobs(1)
        for _ in range(1, max(args.pages, 1)):
            if store.error or not await store.load_more_jobs():
                break
        if store.error:
            print(f"Error: {store.error}")
            return 1

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        data = [j.to_payload() for j in store.jobs]
        out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote {len(data)} jobs (pages 1-{store.current_page}) to: {out_path}")

    by_id = {str(j.id): j for j in store.jobs}
    for raw_id in args.bookmark:
        job = by_id.get(raw_id)
        if job is None:
            job = next((b for b in store.bookmarks if str(b.id) == raw_id), None)
        if job is None:
            print(f"Job {raw_id} not found in the fetched listing or bookmarks.")
            continue
        added = await store.toggle_bookmark(job)
        print(f"{'Bookmarked' if added else 'Removed bookmark for'} job {raw_id}")

    if args.verify:
        restored = await store.verify_and_repair_bookmarks()
        print(f"Bookmark storage holds {len(restored)} jobs.")

    if args.clear:
        if await store.clear_bookmarks():
            print("Cleared all bookmarks.")

    if args.list_bookmarks:
        for job in store.bookmarks:
            print(_describe(job))
        print(f"{len(store.bookmarks)} bookmarked jobs.")

    if store.error:
        print(f"Error: {store.error}")
        return 1
    return 0


def main() -> None:
    args = parse_args()
    settings = load_settings()
    configure_logging(settings)
    store = JobStore.from_settings(settings, notifier=ConsoleNotifier())
    raise SystemExit(asyncio.run(run(args, store)))


if __name__ == "__main__":
    main()
