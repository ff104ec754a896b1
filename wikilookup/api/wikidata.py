"""Wikidata API client for fetching entity claims and labels."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .base import ApiClient
from ..core.exceptions import ResponseFormatError, WikiLookupError
from ..core.models import LabelMap, Reference

logger = logging.getLogger(__name__)


class WikidataClient(ApiClient):
    """Client for the ``wbgetentities`` action of the Wikidata API."""

    def get_claims(self, reference: Reference) -> Optional[Dict[str, List[Dict[str, Any]]]]:
        """
        Fetch the raw claims of the entity linked to a Wikipedia article.

        Args:
            reference: Article on the ``<language>wiki`` site

        Returns:
            Dictionary of property ID to list of statements, or ``None`` when
            no entity is linked to the article
        """
        params = {
            "action": "wbgetentities",
            "sites": f"{reference.language}wiki",
            "titles": reference.api_title,
            "props": "claims",
            "format": "json",
        }
        data = self.get_json(self.config.wikidata_claims_url, params)

        if not isinstance(data, dict) or not data.get("entities"):
            raise ResponseFormatError(f"No entities in Wikidata response for {reference}")

        entities = data["entities"]
        if not isinstance(entities, dict):
            raise ResponseFormatError(f"Unexpected entities in Wikidata response for {reference}")

        entity = next(iter(entities.values()))
        if not isinstance(entity, dict):
            raise ResponseFormatError(f"Unexpected entity in Wikidata response for {reference}")
        if "missing" in entity:
            return None

        claims = entity.get("claims", {})
        if not isinstance(claims, dict):
            raise ResponseFormatError(f"Unexpected claims in Wikidata response for {reference}")
        return claims

    def get_labels(self, ids: Iterable[str]) -> LabelMap:
        """
        Resolve labels for property and entity ids.

        Ids are requested in chunks of ``label_batch_size``, one request at a
        time. Ids without a label in ``label_language`` map to ``False``. If a
        chunk fails, its ids stay unresolved and the labels gathered so far are
        returned.
        """
        unique_ids = list(dict.fromkeys(ids))
        size = self.config.label_batch_size
        language = self.config.label_language
        labels = LabelMap()

        for i in range(0, len(unique_ids), size):
            chunk = unique_ids[i:i + size]
            params = {
                "action": "wbgetentities",
                "languages": language,
                "props": "labels",
                "format": "json",
                "ids": "|".join(chunk),
            }
            try:
                data = self.get_json(self.config.wikidata_labels_url, params)
                entities = data["entities"]
                if not isinstance(entities, dict):
                    raise ResponseFormatError("Label response without an entities map")
            except (WikiLookupError, KeyError, TypeError) as e:
                logger.warning("Label lookup for %d ids failed: %s", len(chunk), e)
                break

            for item in chunk:
                labels[item] = _label_value(entities.get(item), language)

        return labels


def _label_value(entity: Any, language: str) -> Union[str, bool]:
    """The label of ``entity`` in ``language``, or ``False`` when it has none."""
    entity_labels = entity.get("labels") if isinstance(entity, dict) else None
    if not isinstance(entity_labels, dict):
        return False
    label = entity_labels.get(language)
    if not isinstance(label, dict):
        return False
    return label.get("value") or False
