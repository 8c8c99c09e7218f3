"""
Medicine label lookups against OpenFDA.

Enriches detected medicine names with purpose, dosage, warnings and side
effects from the FDA drug label endpoint. Any failure falls back to curated
label data so callers always get a usable record.
"""
import asyncio
import logging
import re
from typing import Dict, List, Optional

import aiohttp

from rxcheck.config import get_settings
from rxcheck.constants import CacheTTL, Limits
from rxcheck.drug_data import FALLBACK_MEDICINE_DATA, get_risk_level
from rxcheck.schemas import MedicineDetails
from rxcheck.services.cache import cache_get_json, cache_key, cache_set_json

logger = logging.getLogger(__name__)

LIST_SEPARATORS = re.compile(r"[,;.]")

DEFAULT_PURPOSE = "Pain reliever and fever reducer"
DEFAULT_INDICATIONS = "Used for treatment as prescribed by healthcare provider"
DEFAULT_DOSAGE = "As directed by physician"
DEFAULT_WARNINGS = "Consult healthcare provider before use"
DEFAULT_SIDE_EFFECTS = ["Nausea", "Dizziness", "Headache"]
DEFAULT_INTERACTIONS = ["Consult healthcare provider"]


def _first(item: Dict, field: str) -> Optional[str]:
    values = item.get(field)
    if values:
        return values[0]
    return None


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..."


def _split_list(text: str, limit: int) -> List[str]:
    """First `limit` pieces of a label paragraph, blanks dropped."""
    pieces = LIST_SEPARATORS.split(text)[:limit]
    return [piece.strip() for piece in pieces if piece.strip()]


def parse_label(drug_name: str, item: Dict) -> MedicineDetails:
    """Shape one OpenFDA label result into medicine details."""
    purpose = _first(item, "purpose")
    indications = _first(item, "indications_and_usage")
    dosage = _first(item, "dosage_and_administration")
    warnings = _first(item, "warnings")
    adverse_reactions = _first(item, "adverse_reactions")
    drug_interactions = _first(item, "drug_interactions")

    if not purpose:
        purpose = _truncate(indications, Limits.PURPOSE_CHARS) if indications else DEFAULT_PURPOSE

    return MedicineDetails(
        name=drug_name,
        purpose=purpose,
        indications=_truncate(indications, Limits.INDICATIONS_CHARS) if indications else DEFAULT_INDICATIONS,
        dosage=_truncate(dosage, Limits.DOSAGE_CHARS) if dosage else DEFAULT_DOSAGE,
        warnings=_truncate(warnings, Limits.WARNINGS_CHARS) if warnings else DEFAULT_WARNINGS,
        side_effects=(
            _split_list(adverse_reactions, Limits.SIDE_EFFECTS)
            if adverse_reactions else list(DEFAULT_SIDE_EFFECTS)
        ),
        interactions=(
            _split_list(drug_interactions, Limits.LABEL_INTERACTIONS)
            if drug_interactions else list(DEFAULT_INTERACTIONS)
        ),
        risk_level=get_risk_level(drug_name),
    )


def get_fallback_medicine_data(drug_name: str) -> MedicineDetails:
    """Curated details for well-known medicines, generic advice otherwise."""
    curated = FALLBACK_MEDICINE_DATA.get(drug_name.lower())
    if curated:
        return MedicineDetails(**curated)

    return MedicineDetails(
        name=drug_name[:1].upper() + drug_name[1:],
        purpose="Medication as prescribed",
        indications="Used as directed by healthcare provider",
        dosage="As prescribed by physician",
        warnings="Follow healthcare provider instructions",
        side_effects=["Consult healthcare provider"],
        interactions=["Consult healthcare provider"],
        risk_level="Medium",
    )


class MedicineInfoFetcher:
    """Fetches medicine label information from OpenFDA."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.OPENFDA_BASE_URL).rstrip("/")
        self.api_key = settings.OPENFDA_API_KEY if api_key is None else api_key
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.OPENFDA_TIMEOUT_SECONDS
        )

    def _label_params(self, drug_name: str) -> Dict[str, str]:
        params = {
            "search": f'openfda.brand_name:"{drug_name}" OR openfda.generic_name:"{drug_name}"',
            "limit": "1",
        }
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    async def fetch_label(self, drug_name: str) -> Optional[Dict]:
        """
        Fetch the first OpenFDA label matching a brand or generic name.

        Returns None when OpenFDA has no label or cannot be reached.
        """
        url = f"{self.base_url}/label.json"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=self._label_params(drug_name)) as response:
                    if response.status != 200:
                        logger.warning(f"OpenFDA API returned status {response.status} for {drug_name}")
                        return None
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"FDA API error for {drug_name}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected OpenFDA response for {drug_name}")
            return None

        results = data.get("results") or []
        return results[0] if results else None

    async def get_medicine_info(self, drug_name: str) -> MedicineDetails:
        """
        Label details for a medicine, from cache, OpenFDA or curated data.
        """
        key = cache_key("openfda_label", drug_name.lower())
        cached = await cache_get_json(key)
        if cached:
            logger.info(f"Returning label for {drug_name} from cache")
            # Keyed case-insensitively, so report the name as requested
            return MedicineDetails(**{**cached, "name": drug_name})

        label = await self.fetch_label(drug_name)
        if label is None:
            logger.info(f"Using fallback data for {drug_name}")
            return get_fallback_medicine_data(drug_name)

        details = parse_label(drug_name, label)
        await cache_set_json(key, details.model_dump(mode="json"), ttl_seconds=CacheTTL.OPENFDA_LABEL)
        return details


def create_medicine_info_fetcher() -> MedicineInfoFetcher:
    """Factory function to create a label fetcher from settings."""
    return MedicineInfoFetcher()
