# db/maintenance.py
from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Iterable, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from api.schemas.autofill import DraftSpecies
from api.schemas.species import parse_population
from api.services.autofill import AutofillError, autofill
from db.engine import create_schema, healthcheck, session_scope
from db.models import Species
from db.utils import _progress_line

# ---------- Shared helpers ----------


def iter_incomplete_species(
    db: Session,
    start_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> Iterable[Species]:
    """Species with at least one field the autofill could supply."""
    q = select(Species).where(
        or_(
            Species.scientific_name.is_(None),
            Species.kingdom.is_(None),
            Species.description.is_(None),
            Species.image.is_(None),
            Species.total_population.is_(None),
        )
    )
    if start_id:
        q = q.where(Species.id >= start_id)
    q = q.order_by(Species.id.asc())
    if limit:
        q = q.limit(limit)
    for sp in db.execute(q).scalars():
        yield sp


def draft_from_species(sp: Species) -> DraftSpecies:
    return DraftSpecies(
        scientific_name=sp.scientific_name or "",
        common_name=sp.common_name or "",
        total_population="" if sp.total_population is None else str(sp.total_population),
        kingdom=sp.kingdom or "",
        description=sp.description or "",
        image=sp.image or "",
    )


def apply_draft(sp: Species, draft: DraftSpecies, filled: list[str]) -> None:
    """Copy only the fields the autofill just filled onto the stored record."""
    for name in filled:
        value = getattr(draft, name)
        if name == "total_population":
            value = parse_population(value)
        if value is not None and getattr(sp, name) is None:
            setattr(sp, name, value)


# ---------- Subcommands ----------


def cmd_init_db(args: argparse.Namespace) -> None:
    create_schema()
    print("Created tables.")


def cmd_healthcheck(args: argparse.Namespace) -> None:
    ok = healthcheck()
    print("database: ok" if ok else "database: unreachable")
    if not ok:
        sys.exit(1)


def cmd_autofill(args: argparse.Namespace) -> None:
    try:
        result = autofill(args.query)
    except AutofillError as e:
        print(f"[autofill] {e}")
        sys.exit(1)
    print(result.notification)
    print(json.dumps(result.draft.model_dump(), indent=2, ensure_ascii=False))


def cmd_enrich(args: argparse.Namespace) -> None:
    start_ts = time.monotonic()

    with session_scope() as db:
        if getattr(args, "ids", None):
            ids = [int(x) for x in args.ids.split(",") if x.strip()]
            targets = [db.get(Species, sid) for sid in ids]
            target_ids = [t.id for t in targets if t is not None]
        else:
            target_ids = [
                sp.id
                for sp in iter_incomplete_species(
                    db, start_id=args.start_id, limit=args.limit
                )
            ]

    total = len(target_ids)
    if total == 0:
        print("[enrich] nothing to do")
        return
    print(f"[enrich] will process {total} species")

    done = updated = failures = 0
    for sid in target_ids:
        extra = f"sid={sid}"
        try:
            with session_scope() as db:
                sp = db.get(Species, sid)
                result = autofill(None, draft_from_species(sp))
                if result.filled and not args.dry_run:
                    apply_draft(sp, result.draft, result.filled)
                if result.filled:
                    updated += 1
                extra = f"sid={sid} +{','.join(result.filled) or '-'}"
        except AutofillError as e:
            failures += 1
            extra = f"sid={sid} {type(e).__name__}"
        done += 1
        print(_progress_line(done, total, start_ts, extra))
        if not args.no_sleep:
            time.sleep(max(0.0, 1.0 / max(0.1, args.rate)))

    print(
        f"[enrich] done: {done}/{total} | updated={updated} | failures={failures}"
        + (" | dry-run" if args.dry_run else "")
    )


# ---------- CLI ----------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Species catalog maintenance CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("init-db", help="Create tables on DATABASE_URL")
    sp.set_defaults(func=cmd_init_db)

    sp = sub.add_parser("healthcheck", help="Check the database connection")
    sp.set_defaults(func=cmd_healthcheck)

    sp = sub.add_parser("autofill", help="Print a draft autofilled from Wikipedia")
    sp.add_argument("query", help="Scientific or common name")
    sp.set_defaults(func=cmd_autofill)

    sp = sub.add_parser(
        "enrich", help="Fill blank fields of stored species from Wikipedia/Wikidata"
    )
    sp.add_argument("--ids", type=str, help="Comma-separated species ids to process")
    sp.add_argument("--start-id", type=int, default=None, help="Start at id ≥ this")
    sp.add_argument("--limit", type=int, default=None, help="Max number of species")
    sp.add_argument("--dry-run", action="store_true", help="Look up but don't write")
    sp.add_argument(
        "--rate", type=float, default=1.0, help="Politeness sleep rate (species/sec)"
    )
    sp.add_argument("--no-sleep", action="store_true", help="Disable sleep throttle")
    sp.set_defaults(func=cmd_enrich)

    return p


def main(argv: Optional[list[str]] = None):
    p = build_parser()
    args = p.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
