"""
Central configuration for the product copy pipeline.

This module defines:
- Input guards and the candidate tables used to decode and split supplier files.
- Length limits for the marketplace title variants and the USP list.
- Text-generation settings (model, timeout, retry/backoff, batch concurrency).

Deployment-sensitive values can be overridden from the environment (a `.env`
file is honoured). Everything else is a constant and should be imported where
needed (no runtime logic here).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


MAX_FILE_SIZE_MB = 50

# Decoding: primary first, then Windows-1252 (undefined bytes fall through to Latin-1).
ENCODING_CANDIDATES = ("utf-8", "cp1252", "iso-8859-1")
REPLACEMENT_CHAR = "\ufffd"
BYTE_ORDER_MARK = "\ufeff"

DELIMITER_CANDIDATES = (";", ",", "\t", "|")
DELIMITER_SAMPLE_LINES = 3
DEFAULT_DELIMITER = ","

EXCEL_SUFFIXES = (".xlsx", ".xlsm")

TITLE_V1_MAX = 100
TITLE_V2_MAX = 80
MAX_MODEL_CODES_IN_TITLE = 3

USP_COUNT = 5
USP_MIN_CHARS = 10
USP_MAX_CHARS = 100
NARRATIVE_MIN_SENTENCES = 2
NARRATIVE_MAX_SENTENCES = 6

DEFAULT_PACKAGE_CONTENTS = "Produkt wie beschrieben"

DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None

GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "60"))
GENERATION_MAX_RETRIES = int(os.getenv("GENERATION_MAX_RETRIES", "3"))
GENERATION_BASE_DELAY_SECONDS = float(os.getenv("GENERATION_BASE_DELAY_SECONDS", "1.0"))
BATCH_CONCURRENCY = int(os.getenv("BATCH_CONCURRENCY", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
