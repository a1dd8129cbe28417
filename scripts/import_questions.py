# scripts/import_questions.py
import argparse
import sys

from sqlmodel import Session

from quizbank.core.db import get_engine, init_db, make_engine, set_engine
from quizbank.core.errors import ImportFailed
from quizbank.core.importer import (
    COMPREHENSION_CATEGORY,
    LOCALIZED_CATEGORY,
    import_comprehension_file,
    import_localized_questions_file,
)
from quizbank.core.logging import configure_logging


def main(argv=None):
    p = argparse.ArgumentParser(description="Offline question bank import")
    p.add_argument("--db", default=None, help="SQLAlchemy URL, defaults to DATABASE_URL")
    sub = p.add_subparsers(dest="mode", required=True)

    sub.add_parser("init", help="Create the tables if they do not exist")

    a = sub.add_parser("comprehension", help="Import comprehension sets ({'comprehensions': [...]})")
    a.add_argument("file")
    a.add_argument("--subject", default=COMPREHENSION_CATEGORY[0])
    a.add_argument("--grade", default=COMPREHENSION_CATEGORY[1])

    b = sub.add_parser("localized", help="Import single-answer questions with per-language texts ({'questions': [...]})")
    b.add_argument("file")
    b.add_argument("--subject", default=LOCALIZED_CATEGORY[0])
    b.add_argument("--grade", default=LOCALIZED_CATEGORY[1])
    b.add_argument("--lang", default="en")

    args = p.parse_args(argv)
    configure_logging("INFO")

    if args.db:
        set_engine(make_engine(args.db))
    init_db()

    if args.mode == "init":
        print(f"[OK] schema ensured on {get_engine().url}")
        return 0

    with Session(get_engine()) as session:
        try:
            if args.mode == "comprehension":
                summary = import_comprehension_file(session, args.file, args.subject, args.grade)
            else:
                summary = import_localized_questions_file(session, args.file, args.subject, args.grade, args.lang)
        except ImportFailed as e:
            print(f"[ERR] {e.summary}: {e.message}")
            return 1

    print(f"[OK] {args.file}: {summary.imported} imported into category {summary.category_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
