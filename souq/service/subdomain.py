import logging
import re
import time
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

ARABIC_TO_ENGLISH = {
    "متجر": "store",
    "محل": "shop",
    "مؤسسة": "company",
    "شركة": "company",
    "مكتب": "office",
    "مركز": "center",
}

SUBDOMAIN_RE = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")
SHORT_SUBDOMAIN_RE = re.compile(r"^[a-z0-9]{1,63}$")


def generate_valid_subdomain(store_name: str, fallback: Optional[str] = None) -> str:
    processed = store_name
    for arabic, english in ARABIC_TO_ENGLISH.items():
        processed = processed.replace(arabic, english)

    subdomain = processed.strip().lower()
    subdomain = re.sub(r"\s+", "-", subdomain)
    subdomain = re.sub(r"[^a-z0-9-]", "", subdomain)
    subdomain = re.sub(r"-+", "-", subdomain)
    subdomain = subdomain.strip("-")

    if len(subdomain) < 3:
        logger.info("⚠️ Generated subdomain too short, using fallback")
        subdomain = fallback or f"store-{int(time.time() * 1000)}"

    if subdomain[0].isdigit():
        subdomain = f"store-{subdomain}"

    logger.debug("🔧 Subdomain generation: %r -> %r -> %r", store_name, processed, subdomain)
    return subdomain


def validate_subdomain(subdomain: str) -> bool:
    is_valid = bool(SUBDOMAIN_RE.match(subdomain) or SHORT_SUBDOMAIN_RE.match(subdomain))
    if not is_valid:
        logger.error("❌ Invalid subdomain: %s", subdomain)
    return is_valid


def ensure_unique_subdomain(subdomain: str, taken: Iterable[str]) -> str:
    taken = set(taken)
    if subdomain not in taken:
        return subdomain
    suffix = 2
    while f"{subdomain}-{suffix}" in taken:
        suffix += 1
    return f"{subdomain}-{suffix}"
