"""Create the schema and load the standard chart of accounts plus demo users."""
from __future__ import annotations

from freightdesk.core.config import get_settings
from freightdesk.core.log import get_logger, init_logging, log_context, shutdown_logging
from freightdesk.db.engine import create_sync_engine
from freightdesk.db.seed import create_schema, seed_chart_of_accounts, seed_demo_users
from freightdesk.db.session import session_scope

logger = get_logger(__name__)


def main() -> None:
    init_logging()
    log_context.bind(script="seed_demo_data")
    try:
        settings = get_settings()
        engine = create_sync_engine()
        create_schema(engine)
        logger.info("Schema ready on %s", settings.database.masked_url)

        with session_scope() as session:
            accounts = seed_chart_of_accounts(session)
            users = seed_demo_users(session)
    finally:
        shutdown_logging()
    print(f"✅ {len(accounts)} accounts in chart, {users} demo users created")


if __name__ == "__main__":
    main()
