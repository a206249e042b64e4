"""
CLI entry point for the search sync service.
"""

import argparse
import asyncio
import json
import logging
import sys

from .algolia_client import AlgoliaClient
from .config import ServiceConfig
from .delivery_client import DeliveryClient
from .graph_resolver import ContentGraphResolver
from .pipeline import SyncPipeline, write_batch
from ..schema.notification import ItemNotification
from ..utils.logging import setup_sync_logger


def show_config(config: ServiceConfig):
    """Print configuration without secrets."""
    print("Search Sync Configuration:")
    print(f"  Delivery API: {config.delivery_config.base_url}")
    print(f"  Wait For New Content: {config.delivery_config.wait_for_new_content}")
    print(f"  Slug Element: {config.sync_config.slug_element}")
    print(f"  Max Depth: {config.sync_config.max_depth}")
    print(f"  Algolia App: {config.algolia_app_id or '(from webhook query)'}")
    print(f"  Algolia Index: {config.algolia_index or '(from webhook query)'}")
    missing = config.missing_secrets()
    print(f"  Missing Secrets: {', '.join(missing) if missing else 'none'}")


async def sync_item(config: ServiceConfig, environment_id: str, codename: str, language: str, dry_run: bool) -> int:
    """Re-index a single item, as if a webhook had named it."""
    delivery_client = DeliveryClient(config.delivery_config)
    pipeline = SyncPipeline(ContentGraphResolver(delivery_client), config.sync_config)
    notification = ItemNotification(environment_id=environment_id, codename=codename, language=language)

    try:
        batch = await pipeline.build_batch([notification])
        if dry_run:
            records = [record.to_index_object() for record in batch.records_to_upsert.values()]
            print(json.dumps(records, indent=2, ensure_ascii=False))
            return 0 if records else 1

        gateway = AlgoliaClient(config.algolia_config())
        try:
            outcome = await write_batch(batch, gateway)
        finally:
            await gateway.close()
        print(outcome.model_dump_json(by_alias=True))
        return 0
    finally:
        await delivery_client.close()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Kontent.ai to Algolia search sync")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Show configuration")

    sync_parser = subparsers.add_parser("sync", help="Re-index one content item")
    sync_parser.add_argument("--environment-id", required=True, help="Kontent.ai environment id")
    sync_parser.add_argument("--codename", required=True, help="Content item codename")
    sync_parser.add_argument("--language", default="default", help="Language codename")
    sync_parser.add_argument("--dry-run", action="store_true", help="Print the record instead of writing it")

    serve_parser = subparsers.add_parser("serve", help="Run the webhook server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level"
    )
    parser.add_argument("--json-logs", action="store_true", help="Output logs in JSON format")

    args = parser.parse_args()

    setup_sync_logger("searchsync", args.log_level, args.json_logs)

    try:
        config = ServiceConfig.from_environment()

        if args.command == "config":
            show_config(config)

        elif args.command == "sync":
            exit_code = asyncio.run(
                sync_item(config, args.environment_id, args.codename, args.language, args.dry_run)
            )
            sys.exit(exit_code)

        elif args.command == "serve":
            import uvicorn

            uvicorn.run("searchsync.backend.server:app", host=args.host, port=args.port)

    except Exception as e:
        logging.error(f"Command '{args.command}' failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
