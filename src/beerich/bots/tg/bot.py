"""Main entry point for the Telegram bot."""

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from tortoise import Tortoise

from beerich.bots.tg.handlers import common, income
from beerich.bots.tg.middlewares.user import UserMiddleware
from beerich.config import settings
from beerich.core.attachments import LocalAttachmentStore
from beerich.core.db import TORTOISE_ORM
from beerich.core.repositories.attachment_cleanup import AttachmentCleanupRepository
from beerich.core.repositories.invoice import InvoiceRepository
from beerich.services.invoices import InvoiceService
from beerich.services.scheduler import SchedulerService

logger = logging.getLogger(__name__)


async def on_startup(dispatcher: Dispatcher, bot: Bot):
    """Actions on bot startup."""
    logger.info("Initializing database...")
    await Tortoise.init(config=TORTOISE_ORM)
    logger.info("Database initialized.")

    attachments = LocalAttachmentStore(settings.ATTACHMENTS_DIR)
    cleanup_repo = AttachmentCleanupRepository()
    invoice_service = InvoiceService(
        invoice_repo=InvoiceRepository(attachments, cleanup_repo),
    )
    dispatcher["attachments"] = attachments
    dispatcher["invoice_service"] = invoice_service
    logger.info("Services injected into dispatcher.")

    scheduler_service = SchedulerService(
        attachments,
        cleanup_repo,
        AsyncIOScheduler(),
        interval_minutes=settings.CLEANUP_INTERVAL_MINUTES,
        max_attempts=settings.CLEANUP_MAX_ATTEMPTS,
    )
    scheduler_service.start()
    dispatcher["scheduler_service"] = scheduler_service

    logger.info("Deleting webhook and dropping pending updates...")
    await bot.delete_webhook(drop_pending_updates=True)
    logger.info("Webhook deleted.")
    logger.info("Bot started.")


async def on_shutdown(dispatcher: Dispatcher, bot: Bot):
    """Actions on bot shutdown."""
    logger.info("Closing connections...")
    scheduler_service = dispatcher.get("scheduler_service")
    if scheduler_service is not None:
        scheduler_service.shutdown()
    await Tortoise.close_connections()
    await bot.session.close()
    logger.info("Connections closed.")


async def main():
    """Initializes and starts the bot."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logger.info("Starting bot initialization...")

    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode="HTML"),
    )
    dp = Dispatcher()

    # Register startup and shutdown hooks
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    # Every handler receives the BeeRich user behind the update
    dp.message.outer_middleware(UserMiddleware())
    dp.callback_query.outer_middleware(UserMiddleware())

    # Register routers; common first so /cancel works inside any flow
    dp.include_router(common.router)
    dp.include_router(income.router)

    await dp.start_polling(bot, dispatcher=dp)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logger.info("Bot stopped manually.")
