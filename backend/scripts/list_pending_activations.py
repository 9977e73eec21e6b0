"""Print or discard category activations recorded while the marketplace was offline."""

from __future__ import annotations

import argparse
import asyncio
import logging

from hotelhub.db.session import dispose_engine
from hotelhub.models.pending_activation import CategoryScope
from hotelhub.services.activation_store import ActivationStore

LOGGER = logging.getLogger("pending_activations")


async def run(provider_id: str | None, scope: CategoryScope | None, discard: bool) -> int:
    store = ActivationStore()
    try:
        pending = await store.list_pending(provider_id=provider_id, scope=scope)
        for entry in pending:
            print(
                f"{entry.created_at:%Y-%m-%d %H:%M}  {entry.provider_id}  "
                f"{entry.scope.value:<7}  {entry.intent.value:<10}  {entry.category_key}"
            )
            if discard:
                await store.clear(
                    provider_id=entry.provider_id,
                    scope=entry.scope,
                    category_key=entry.category_key,
                )
        if discard and pending:
            LOGGER.info("Discarded %d pending activation(s)", len(pending))
        return len(pending)
    finally:
        await dispose_engine(store.database_url)


def main() -> None:
    parser = argparse.ArgumentParser(description="List pending offline activations")
    parser.add_argument("--provider", help="Only show intents of this provider id.")
    parser.add_argument(
        "--scope",
        choices=[scope.value for scope in CategoryScope],
        help="Only show one category scope.",
    )
    parser.add_argument(
        "--discard",
        action="store_true",
        help="Delete the listed intents instead of keeping them for reconciliation.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    scope = CategoryScope(args.scope) if args.scope else None
    count = asyncio.run(run(args.provider, scope, args.discard))
    if count == 0:
        print("No pending activations")


if __name__ == "__main__":
    main()
