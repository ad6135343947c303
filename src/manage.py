"""Orders management CLI.

Runs the event-driven invocations from the command line, one per subcommand.
Payloads are JSON, read from ``--payload FILE`` or stdin; each command prints
its JSON report. Every invocation works against the shared record store
configured in ``orders/domain.toml``.

Usage:
    python src/manage.py setup-db                       # Create the order tables
    python src/manage.py drop-db                        # Drop the order tables
    python src/manage.py sweep                          # Promote stale RECEIVED orders
    python src/manage.py advance --payload req.json     # Advance one order
    python src/manage.py record-changes < changes.json  # Notify on a change batch
    python src/manage.py ingest-documents < s3.json     # Route arrived documents
"""

import argparse
import json
import sys


def _read_payload(path):
    if path and path != "-":
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    return sys.stdin.read()


def init_domain():
    """Initialize the orders domain and make sure its tables exist."""
    from orders.domain import orders
    from orders.utils.db import setup_db

    orders.init()
    setup_db(orders)
    return orders


def run(command, payload=None):
    """Run one invocation inside the orders domain context and return its report.

    The domain must already be initialized.
    """
    from orders.domain import orders
    from orders.entrypoints import (
        invoke_advance,
        invoke_document_arrivals,
        invoke_record_changes,
        invoke_sweep,
    )

    handlers = {
        "advance": invoke_advance,
        "record-changes": invoke_record_changes,
        "ingest-documents": invoke_document_arrivals,
    }

    with orders.domain_context():
        if command == "sweep":
            return invoke_sweep()
        return handlers[command](payload)


def main():
    parser = argparse.ArgumentParser(description="Orders management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create the order tables")
    subparsers.add_parser("drop-db", help="Drop the order tables")
    subparsers.add_parser("sweep", help="Promote RECEIVED orders past the age threshold")
    for name, help_text in (
        ("advance", "Advance one order to IN_PREPARATION"),
        ("record-changes", "Send notifications for a batch of record changes"),
        ("ingest-documents", "Route a batch of document arrivals"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--payload", default="-", help="JSON payload file (default: stdin)")

    args = parser.parse_args()

    from orders.errors import OrdersError
    from orders.utils.db import drop_db

    orders = init_domain()
    if args.command == "setup-db":
        print("Database tables created.")
        return
    if args.command == "drop-db":
        drop_db(orders)
        print("Database tables dropped.")
        return

    payload = None if args.command == "sweep" else _read_payload(args.payload)
    try:
        report = run(args.command, payload)
    except OrdersError as exc:
        print(json.dumps({"error": exc.message, "type": type(exc).__name__}))
        sys.exit(1)

    print(json.dumps(report, default=str, indent=2))


if __name__ == "__main__":
    main()
