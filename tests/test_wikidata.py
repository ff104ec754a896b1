"""Tests for Wikidata claims, labels and fact rows."""

from unittest.mock import Mock, patch

import pytest
import requests

from wikilookup import EMPTY, wikidata_facts
from wikilookup.api.wikidata import WikidataClient
from wikilookup.core.config import Config
from wikilookup.core.exceptions import ResponseFormatError
from wikilookup.core.models import (
    Claim,
    LabelMap,
    LookupStatus,
    SimpleValue,
    ValueKind,
    parse_reference,
)
from wikilookup.lookups import Lookups
from wikilookup.processing.claims import (
    fact_rows,
    ids_to_label,
    simplify_claims,
    simplify_statement,
)


def json_response(data) -> Mock:
    response = Mock()
    response.json.return_value = data
    return response


def statement(datatype, value=None, snaktype="value"):
    mainsnak = {"snaktype": snaktype, "property": "P0", "datatype": datatype}
    if value is not None:
        mainsnak["datavalue"] = {"value": value, "type": "string"}
    return {"mainsnak": mainsnak, "type": "statement", "rank": "normal"}


def item(numeric_id):
    return statement("wikibase-item", {"entity-type": "item", "numeric-id": numeric_id})


BERLIN_CLAIMS = {
    "entities": {
        "Q64": {
            "type": "item",
            "id": "Q64",
            "claims": {
                "P17": [item(183)],
                "P1082": [statement("quantity", {"amount": "+3644826", "unit": "1"})],
                "P1448": [statement("monolingualtext", {"text": "Berlin", "language": "de"})],
                "P6": [item(100), item(200)],
                "P856": [statement("url", "https://www.berlin.de/")],
                "P625": [statement("globe-coordinate", {"latitude": 52.5, "longitude": 13.4})],
                "P1376": [item(300)],
            },
        }
    }
}


def label(value):
    return {"labels": {"en": {"language": "en", "value": value}}}


BERLIN_LABELS = {
    "entities": {
        "P17": label("country"),
        "P1082": label("population"),
        "P1448": label("official name"),
        "P6": label("head of government"),
        "P856": label("official website"),
        "P625": label("coordinate location"),
        "P1376": label("capital of"),
        "Q183": label("Germany"),
        "Q100": label("Franziska Giffey"),
        "Q200": label("Kai Wegner"),
        "Q300": {"labels": {}},
    }
}


def fake_get(url, params=None, timeout=None):
    if params["props"] == "claims":
        return json_response(BERLIN_CLAIMS)
    return json_response(BERLIN_LABELS)


class TestSimplifyStatement:
    """Test reduction of statements to simple values."""

    @pytest.mark.parametrize("datatype", ["string", "commonsMedia", "url", "math", "external-id"])
    def test_string_like(self, datatype):
        assert simplify_statement(statement(datatype, "x")) == SimpleValue(ValueKind.LITERAL, "x")

    def test_monolingual_text(self):
        value = simplify_statement(statement("monolingualtext", {"text": "Berlin", "language": "de"}))
        assert value == SimpleValue(ValueKind.LITERAL, "Berlin")

    def test_entity(self):
        assert simplify_statement(item(64)) == SimpleValue(ValueKind.ENTITY, "Q64")

    def test_time_and_quantity(self):
        time = simplify_statement(statement("time", {"time": "+1237-01-01T00:00:00Z"}))
        amount = simplify_statement(statement("quantity", {"amount": "+891.68"}))
        assert time == SimpleValue(ValueKind.TIME, "+1237-01-01T00:00:00Z")
        assert amount == SimpleValue(ValueKind.QUANTITY, "+891.68")

    def test_unsupported_and_empty(self):
        assert simplify_statement(statement("globe-coordinate", {"latitude": 1})) is None
        assert simplify_statement(statement("time", snaktype="somevalue")) is None
        assert simplify_statement({}) is None

    def test_malformed_value(self):
        with pytest.raises(ResponseFormatError):
            simplify_statement(statement("wikibase-item", {"id": "Q1"}))


class TestFactRows:
    """Test emission of fact rows."""

    CLAIMS = [
        Claim("P17", [SimpleValue(ValueKind.ENTITY, "Q183")]),
        Claim("P6", [SimpleValue(ValueKind.ENTITY, "Q100"), SimpleValue(ValueKind.ENTITY, "Q200")]),
        Claim("P1082", [SimpleValue(ValueKind.QUANTITY, "+3644826")]),
    ]
    LABELS = LabelMap({
        "P17": "country", "P6": "head of government", "P1082": "population",
        "Q183": "Germany", "Q100": "Franziska Giffey", "Q200": "Kai Wegner",
    })

    def test_default_skips_multi_valued(self):
        assert fact_rows(self.CLAIMS, self.LABELS) == [
            ["country", "Germany"],
            ["population", "+3644826"],
        ]

    def test_all(self):
        rows = fact_rows(self.CLAIMS, self.LABELS, "all")
        assert rows == [
            ["country", "Germany"],
            ["head of government", "Franziska Giffey"],
            ["head of government", "Kai Wegner"],
            ["population", "+3644826"],
        ]

    def test_first_is_case_insensitive(self):
        rows = fact_rows(self.CLAIMS, self.LABELS, "FIRST")
        assert ["head of government", "Franziska Giffey"] in rows
        assert ["head of government", "Kai Wegner"] not in rows

    def test_unknown_mode_is_default(self):
        assert fact_rows(self.CLAIMS, self.LABELS, "some") == fact_rows(self.CLAIMS, self.LABELS)

    def test_missing_labels_suppress_rows(self):
        labels = LabelMap({"P17": False, "P1082": "population", "Q183": "Germany"})
        assert fact_rows(self.CLAIMS, labels) == [["population", "+3644826"]]

    def test_ids_to_label(self):
        assert ids_to_label(self.CLAIMS) == ["P17", "P6", "P1082", "Q183", "Q100", "Q200"]


class TestWikidataClient:
    """Test Wikidata API client."""

    def test_init(self):
        client = WikidataClient()
        assert client.config.wikidata_claims_url == "https://wikidata.org/w/api.php"
        assert client.config.wikidata_labels_url == "https://www.wikidata.org/w/api.php"

    @patch('requests.Session.get')
    def test_get_claims_parameters(self, mock_get):
        mock_get.return_value = json_response(BERLIN_CLAIMS)

        claims = WikidataClient().get_claims(parse_reference("de:Berlin Mitte"))

        assert "P17" in claims
        params = mock_get.call_args[1]["params"]
        assert params["action"] == "wbgetentities"
        assert params["sites"] == "dewiki"
        assert params["titles"] == "Berlin_Mitte"
        assert params["props"] == "claims"

    @patch('requests.Session.get')
    def test_missing_entity(self, mock_get):
        mock_get.return_value = json_response(
            {"entities": {"-1": {"site": "enwiki", "title": "Nope", "missing": ""}}}
        )
        assert WikidataClient().get_claims(parse_reference("en:Nope")) is None

    @patch('requests.Session.get')
    def test_labels_are_chunked(self, mock_get):
        mock_get.side_effect = [
            json_response({"entities": {"P1": label("one"), "P2": {"labels": {}}}}),
            json_response({"entities": {"P3": label("three")}}),
        ]
        client = WikidataClient(Config(label_batch_size=2))

        labels = client.get_labels(["P1", "P2", "P3", "P1"])

        assert labels == {"P1": "one", "P2": False, "P3": "three"}
        requested = [call[1]["params"]["ids"] for call in mock_get.call_args_list]
        assert requested == ["P1|P2", "P3"]

    @patch('requests.Session.get')
    def test_failed_chunk_leaves_ids_unresolved(self, mock_get):
        mock_get.side_effect = [
            json_response({"entities": {"P1": label("one"), "P2": label("two")}}),
            requests.ConnectionError("offline"),
        ]
        client = WikidataClient(Config(label_batch_size=2))

        labels = client.get_labels(["P1", "P2", "P3"])

        assert labels == {"P1": "one", "P2": "two"}
        assert not labels.is_resolved("P3")


class TestWikidataFacts:
    """Test the facts lookup end to end."""

    @patch('requests.Session.get')
    def test_single_valued_facts(self, mock_get):
        mock_get.side_effect = fake_get

        assert wikidata_facts("en:Berlin") == [
            ["country", "Germany"],
            ["population", "+3644826"],
            ["official name", "Berlin"],
            ["official website", "https://www.berlin.de/"],
        ]

    @patch('requests.Session.get')
    def test_all_values(self, mock_get):
        mock_get.side_effect = fake_get

        rows = wikidata_facts("en:Berlin", "all")

        assert rows[3:5] == [
            ["head of government", "Franziska Giffey"],
            ["head of government", "Kai Wegner"],
        ]

    @patch('requests.Session.get')
    def test_label_request(self, mock_get):
        mock_get.side_effect = fake_get

        wikidata_facts("en:Berlin")

        label_call = mock_get.call_args_list[1]
        assert label_call[0][0] == "https://www.wikidata.org/w/api.php"
        assert label_call[1]["params"]["ids"] == (
            "P17|P1082|P1448|P6|P856|P625|P1376|Q183|Q100|Q200|Q300"
        )
        assert label_call[1]["params"]["languages"] == "en"

    @patch('requests.Session.get')
    def test_unlinked_article(self, mock_get):
        mock_get.return_value = json_response(
            {"entities": {"-1": {"site": "enwiki", "title": "Nope", "missing": ""}}}
        )
        assert wikidata_facts("en:Nope") == EMPTY
        assert Lookups().facts("en:Nope").status is LookupStatus.NO_DATA

    @patch('requests.Session.get')
    def test_network_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("offline")
        assert wikidata_facts("en:Berlin", "all") == EMPTY

    def test_simplify_claims_keeps_order(self):
        claims = simplify_claims(BERLIN_CLAIMS["entities"]["Q64"]["claims"])
        assert [c.property_id for c in claims] == [
            "P17", "P1082", "P1448", "P6", "P856", "P625", "P1376",
        ]
        assert claims[5].values == []


class TestUnexpectedShapes:
    """Test Wikidata responses that parse as JSON but have the wrong shape."""

    CLAIMS = {
        "entities": {
            "Q1": {
                "id": "Q1",
                "claims": {
                    "P17": [item(183)],
                    "P1082": [statement("quantity", {"amount": "+5"})],
                },
            }
        }
    }

    @patch('requests.Session.get')
    def test_list_labels_only_drop_their_row(self, mock_get):
        def get(url, params=None, timeout=None):
            if params["props"] == "claims":
                return json_response(self.CLAIMS)
            return json_response({"entities": {
                "P17": {"labels": []},
                "P1082": label("population"),
                "Q183": label("Germany"),
            }})
        mock_get.side_effect = get

        assert wikidata_facts("en:X") == [["population", "+5"]]
        result = Lookups().facts("en:X")
        assert result.status is LookupStatus.OK
        assert result.data == [["population", "+5"]]

    @patch('requests.Session.get')
    def test_non_dict_label_entries(self, mock_get):
        mock_get.return_value = json_response({"entities": {
            "P1": "bogus",
            "P2": {"labels": {"en": "plain"}},
            "P3": label("three"),
        }})

        labels = WikidataClient().get_labels(["P1", "P2", "P3"])

        assert labels == {"P1": False, "P2": False, "P3": "three"}

    @patch('requests.Session.get')
    def test_list_entities_in_label_response(self, mock_get):
        mock_get.return_value = json_response({"entities": []})

        labels = WikidataClient().get_labels(["P1"])

        assert not labels.is_resolved("P1")

    @pytest.mark.parametrize("payload", [
        {"entities": [{"id": "Q1"}]},
        {"entities": {"Q1": "bogus"}},
        {"entities": {"Q1": {"claims": []}}},
        {"entities": {"Q1": {"claims": {"P17": {"mainsnak": {}}}}}},
        {"entities": {"Q1": {"claims": {"P17": ["bogus"]}}}},
        {"entities": {"Q1": {"claims": {"P17": [{"mainsnak": "bogus"}]}}}},
        {"entities": {"Q1": {"claims": {"P17": [{"mainsnak": {"datavalue": "x"}}]}}}},
    ])
    @patch('requests.Session.get')
    def test_malformed_claims_fail(self, mock_get, payload):
        mock_get.return_value = json_response(payload)

        result = Lookups().facts("en:X")

        assert result.status is LookupStatus.FAILED
        assert isinstance(result.error, ResponseFormatError)
        assert wikidata_facts("en:X") == EMPTY
