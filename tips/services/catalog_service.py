#!/usr/bin/env python3
"""
Prompt catalog service: reads tip prompts from the bundled Excel workbook.

Each sheet is a category. Row 1 is a header; column A holds the topic and
column B the prompt text sent to the completion service.
"""

import logging
import zipfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..lib.app_config import DEFAULT_WORKBOOK_PATH
from ..models import CatalogResult, PromptEntry

# Create logger for this module
logger = logging.getLogger(__name__)

# SyntaxError: malformed XML inside the zip (ElementTree ParseError and lxml
# XMLSyntaxError both derive from it)
WORKBOOK_ERRORS = (OSError, zipfile.BadZipFile, InvalidFileException, KeyError, ValueError, SyntaxError)


def _cell_text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def parse_prompt_rows(rows: Iterable[tuple]) -> List[PromptEntry]:
    """
    Turn (topic, prompt) rows into PromptEntry objects, skipping incomplete rows.

    Whether a row is kept depends only on that row, so malformed rows can
    appear anywhere without changing the resulting list.

    Args:
        rows: Data rows (header already removed)

    Returns:
        List of PromptEntry in row order
    """
    entries = []
    for row_number, row in enumerate(rows, start=2):
        cells = tuple(row or ()) + (None, None)
        topic = _cell_text(cells[0])
        prompt_text = _cell_text(cells[1])

        if not topic or not prompt_text:
            logger.debug(f"[Catalog] Skipping row {row_number}: missing topic or prompt")
            continue

        entries.append(PromptEntry(topic=topic, prompt_text=prompt_text))
        logger.debug(f"[Catalog] Loaded prompt: {topic}")

    return entries


def load_prompts(category: str, workbook_path: Optional[Union[str, Path]] = None) -> CatalogResult:
    """
    Load the prompts for one category (sheet) of the workbook.

    Args:
        category: Sheet name, e.g. 'htmlcss'
        workbook_path: Path to the .xlsx file (defaults to the bundled workbook)

    Returns:
        CatalogResult with the entries, an empty list if the sheet doesn't
        exist, or an error if the workbook can't be opened
    """
    path = Path(workbook_path) if workbook_path else DEFAULT_WORKBOOK_PATH
    logger.info(f"[Catalog] Loading prompts from {path.name}, sheet: {category}")

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except WORKBOOK_ERRORS as e:
        logger.error(f"[Catalog] Error opening prompt workbook {path}: {e}", exc_info=True)
        return CatalogResult(error=f"Could not open prompt workbook: {e}")

    try:
        if category not in workbook.sheetnames:
            logger.warning(f"[Catalog] Sheet '{category}' not found (available: {workbook.sheetnames})")
            return CatalogResult(entries=[])

        sheet = workbook[category]
        entries = parse_prompt_rows(sheet.iter_rows(min_row=2, max_col=2, values_only=True))
    except WORKBOOK_ERRORS as e:
        logger.error(f"[Catalog] Error reading sheet '{category}': {e}", exc_info=True)
        return CatalogResult(error=f"Could not read sheet '{category}': {e}")
    finally:
        workbook.close()

    logger.info(f"[Catalog] Finished loading {len(entries)} prompts from sheet '{category}'")
    return CatalogResult(entries=entries)


def list_categories(workbook_path: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Return the sheet names of the workbook

    Raises:
        One of WORKBOOK_ERRORS if the workbook can't be opened
    """
    path = Path(workbook_path) if workbook_path else DEFAULT_WORKBOOK_PATH
    workbook = load_workbook(path, read_only=True)
    try:
        return list(workbook.sheetnames)
    finally:
        workbook.close()
