"""
Blog backend (SQLite)

Commands:
  init                Create the blog tables in the configured DB
  latest              Print the latest published posts
  archive             Print post counts per month (optionally export CSV)
"""
from __future__ import annotations

import argparse
import logging
import os

import pandas as pd

from .config import read_config
from .db import ensure_schema, get_db_path
from .repository import BlogRepository


# ---------------- Commands ----------------

def cmd_init(args):
    path = get_db_path()
    ensure_schema(path)
    print(f"Schema ensured at {path}")


def cmd_latest(args):
    repo = BlogRepository()
    posts = repo.latest_posts(args.count, args.offset)
    if not posts:
        print("(empty)")
        return
    df = pd.DataFrame(
        [
            {
                "date": p.date.strftime("%Y-%m-%d"),
                "slug": p.slug,
                "title": p.title,
                "category": p.main_category.title if p.main_category else "",
            }
            for p in posts
        ]
    )
    print(df.to_string(index=False))


def archive_frame(counts: dict[int, dict[int, int]]) -> pd.DataFrame:
    rows = [
        {"year": year, "month": month, "count": n}
        for year, months in counts.items()
        for month, n in months.items()
    ]
    return pd.DataFrame(rows, columns=["year", "month", "count"])


def cmd_archive(args):
    repo = BlogRepository()
    df = archive_frame(repo.month_counts(published_only=args.published_only))

    print("\n=== Posts per month ===")
    if not df.empty:
        print(df.to_string(index=False))
    else:
        print("(empty)")

    if args.csv:
        out_dir = os.path.dirname(os.path.abspath(args.csv))
        os.makedirs(out_dir, exist_ok=True)
        df.to_csv(args.csv, index=False, encoding="utf-8-sig")
        print(f"\nCSV exported to {args.csv}")


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blog-backend", description="Blog backend (SQLite)")
    parser.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING (default from config.yaml)")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create blog tables")
    p_init.set_defaults(func=cmd_init)

    p_latest = sub.add_parser("latest", help="print latest published posts")
    p_latest.add_argument("--count", type=int, default=None)
    p_latest.add_argument("--offset", type=int, default=0)
    p_latest.set_defaults(func=cmd_latest)

    p_arc = sub.add_parser("archive", help="post counts per month")
    p_arc.add_argument("--csv", required=False, help="export to this CSV path")
    p_arc.add_argument("--published-only", action="store_true")
    p_arc.set_defaults(func=cmd_archive)
    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = read_config()
    logging.basicConfig(
        level=(args.log_level or cfg["log_level"]).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if getattr(args, "count", 0) is None:
        args.count = cfg["page_size"]
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
