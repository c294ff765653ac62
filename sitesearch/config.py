import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_float_env(name: str, default: Optional[float] = None) -> Optional[float]:
	"""Like `get_float_env`, but "0" or "none" turn the value off (returns None)."""
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	if raw.strip().lower() in ("none", "off"):
		return None
	try:
		value = float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default
	return value if value > 0 else None


USER_AGENT = get_str_env("USER_AGENT", "SiteSearch/0.1")
HTTP_TIMEOUT = get_optional_float_env("HTTP_TIMEOUT", 10.0)
DEFAULT_MAX_PAGES = get_int_env("SITESEARCH_MAX_PAGES", 50)
DEFAULT_MAX_DEPTH = get_int_env("SITESEARCH_MAX_DEPTH", 3)
DEFAULT_MAX_CONCURRENCY = get_int_env("SITESEARCH_MAX_CONCURRENCY", 5)
INDEX_PATH = get_str_env("SITESEARCH_INDEX_PATH", "index.json")
LOG_LEVEL = get_str_env("LOG_LEVEL", "INFO").strip().upper()
