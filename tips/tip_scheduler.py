#!/usr/bin/env python3
"""
Scheduled entry point for the daily tip.
Called once per day by Cloud Scheduler through the HTTP function or the
/scheduled/tip-of-the-day route.
"""

import logging
from typing import Callable, List, Optional

from .lib.app_config import AppConfig, CompletionConfig, get_config
from .models import CatalogResult, DispatchReport, GeneratedTip, GenerationResult, PromptEntry
from .services.catalog_service import load_prompts
from .services.completion_service import RandomSource, generate_tip
from .tip_dispatcher import dispatch_tip

# Create logger for this module
logger = logging.getLogger(__name__)

STATUS_DISPATCHED = "Tip of the Day dispatched!"
STATUS_ABORTED = "Failed to generate tip. Aborting notification dispatch."

CatalogLoader = Callable[[str, object], CatalogResult]
TipGenerator = Callable[[List[PromptEntry], CompletionConfig, Optional[RandomSource]], GenerationResult]
TipDispatcher = Callable[[GeneratedTip, AppConfig], DispatchReport]


def run_tip_of_the_day(
    config: Optional[AppConfig] = None,
    random_source: Optional[RandomSource] = None,
    loader: CatalogLoader = load_prompts,
    generator: TipGenerator = generate_tip,
    dispatcher: TipDispatcher = dispatch_tip
) -> str:
    """
    Load prompts, generate one tip and deliver it.

    Delivery only happens when a tip was generated. Channel failures don't
    change the outcome once delivery was attempted.

    Args:
        config: Pipeline configuration (defaults to the process-wide config)
        random_source: Prompt selection source
        loader: Catalog loader
        generator: Tip generator
        dispatcher: Delivery dispatcher

    Returns:
        STATUS_DISPATCHED or STATUS_ABORTED
    """
    logger.info("[Tips] Starting tip of the day run")
    try:
        config = config or get_config()

        catalog = loader(config.category, config.workbook_path)
        if not catalog.ok:
            logger.error(f"[Tips] Prompt catalog unavailable: {catalog.error}")
            return STATUS_ABORTED

        result = generator(catalog.entries, config.completion, random_source)
        if not result.ok:
            logger.error(f"[Tips] Tip generation failed ({result.reason.value}): {result.error}")
            return STATUS_ABORTED

        dispatcher(result.tip, config)
        logger.info(f"[Tips] Tip dispatched: {result.tip.topic}")
        return STATUS_DISPATCHED
    except Exception as e:
        logger.error(f"[Tips] Error in tip of the day run: {e}", exc_info=True)
        return STATUS_ABORTED
