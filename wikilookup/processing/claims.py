"""Simplify Wikidata claims and turn them into fact rows."""

from typing import Any, Dict, List, Optional

from ..core.exceptions import ResponseFormatError
from ..core.models import Claim, LabelMap, SimpleValue, ValueKind

# Datatypes whose datavalue is already a plain string
STRING_DATATYPES = frozenset({"string", "commonsMedia", "url", "math", "external-id"})

MULTI_VALUE_MODES = ("first", "all")


def simplify_statement(statement: Dict[str, Any]) -> Optional[SimpleValue]:
    """Reduce one statement to a ``SimpleValue``, or ``None`` if unsupported."""
    if not isinstance(statement, dict):
        raise ResponseFormatError(f"Malformed statement: {statement!r}")
    mainsnak = statement.get("mainsnak")
    if not mainsnak:
        return None
    if not isinstance(mainsnak, dict):
        raise ResponseFormatError(f"Malformed mainsnak: {mainsnak!r}")

    datavalue = mainsnak.get("datavalue")
    if datavalue is None:
        # "novalue" and "somevalue" snaks carry no datavalue
        return None
    if not isinstance(datavalue, dict):
        raise ResponseFormatError(f"Malformed datavalue: {datavalue!r}")

    datatype = mainsnak.get("datatype")
    value = datavalue.get("value")

    try:
        if datatype in STRING_DATATYPES:
            return SimpleValue(ValueKind.LITERAL, value)
        if datatype == "monolingualtext":
            return SimpleValue(ValueKind.LITERAL, value["text"])
        if datatype == "wikibase-item":
            return SimpleValue(ValueKind.ENTITY, f"Q{value['numeric-id']}")
        if datatype == "time":
            return SimpleValue(ValueKind.TIME, value["time"])
        if datatype == "quantity":
            return SimpleValue(ValueKind.QUANTITY, value["amount"])
    except (KeyError, TypeError) as e:
        raise ResponseFormatError(f"Malformed {datatype} value: {value!r}") from e
    return None


def simplify_claims(raw_claims: Dict[str, List[Dict[str, Any]]]) -> List[Claim]:
    """Simplify every statement, keeping property order and dropping unsupported values."""
    claims = []
    for property_id, statements in raw_claims.items():
        if not isinstance(statements, list):
            raise ResponseFormatError(f"Statements of {property_id} are not a list")
        values = [simplify_statement(s) for s in statements]
        claims.append(Claim(
            property_id=property_id,
            values=[v for v in values if v is not None],
        ))
    return claims


def ids_to_label(claims: List[Claim]) -> List[str]:
    """Property ids followed by every referenced entity id."""
    ids = [claim.property_id for claim in claims]
    for claim in claims:
        ids.extend(claim.entity_ids())
    return ids


def normalize_mode(mode: Optional[str]) -> Optional[str]:
    if mode and mode.lower() in MULTI_VALUE_MODES:
        return mode.lower()
    return None


def fact_rows(claims: List[Claim], labels: LabelMap,
              mode: Optional[str] = None) -> List[List[str]]:
    """
    Build ``[property label, value]`` rows.

    Single-valued claims always produce a row. Multi-valued claims produce
    rows only with ``mode`` ``"first"`` (the first value) or ``"all"`` (every
    value). Entity values are shown by label; rows whose label or value is
    missing are left out.
    """
    mode = normalize_mode(mode)
    rows = []
    for claim in claims:
        if len(claim.values) == 1:
            selected = claim.values
        elif len(claim.values) > 1 and mode == "first":
            selected = claim.values[:1]
        elif len(claim.values) > 1 and mode == "all":
            selected = claim.values
        else:
            continue

        label = labels.label(claim.property_id)
        for value in selected:
            shown = labels.label(value.value) if value.is_entity else value.value
            if label and shown:
                rows.append([label, shown])
    return rows
