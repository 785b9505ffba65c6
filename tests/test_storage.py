"""Tests for document and step-definition storage."""

from __future__ import annotations

import json

import pytest

from pairwiseqa.combinatorial import build_domains, select_pairwise
from pairwiseqa.errors import InvalidDocumentError
from pairwiseqa.models import PairwiseResult, Step, Tag
from pairwiseqa.storage import (
    PairwiseDocument,
    dump_document,
    load_document,
    load_steps,
    parse_document,
    parse_steps,
    save_document,
)


@pytest.fixture
def document(browser_os_steps) -> PairwiseDocument:
    results = select_pairwise(build_domains(browser_os_steps))
    return PairwiseDocument(steps=browser_os_steps, pairwise_results=results)


class TestDumpDocument:
    """Tests for serializing documents."""

    def test_top_level_keys(self, document):
        data = json.loads(dump_document(document))
        assert set(data) == {"id", "createdAt", "steps", "pairwiseResults"}

    def test_steps_use_persisted_field_names(self, document):
        data = json.loads(dump_document(document))
        step = data["steps"][0]
        assert step["name"] == "Browser"
        assert step["children"][0]["value"] == "Chrome"
        assert step["children"][0]["color"] == "green"

    def test_results_are_tagged_structures(self, document):
        data = json.loads(dump_document(document))
        assert data["pairwiseResults"][0] == {
            "values": {"Browser": "Chrome", "OS": "Windows"},
            "description": "Browser: Chrome | OS: Windows",
            "tags": {"Browser": "green", "OS": "yellow"},
        }

    def test_each_document_gets_fresh_id(self, browser_os_steps):
        assert PairwiseDocument(steps=browser_os_steps).id != PairwiseDocument(steps=browser_os_steps).id


class TestParseDocument:
    """Tests for importing documents."""

    def test_round_trip(self, document):
        parsed = parse_document(dump_document(document))
        assert parsed.steps == document.steps
        assert parsed.pairwise_results == document.pairwise_results
        assert parsed.id == document.id

    def test_minimal_document(self):
        parsed = parse_document('{"steps": [], "pairwiseResults": []}')
        assert parsed.steps == ()
        assert parsed.pairwise_results == ()
        assert parsed.id

    def test_not_json(self):
        with pytest.raises(InvalidDocumentError, match="parsing the JSON"):
            parse_document("{not json")

    def test_not_an_object(self):
        with pytest.raises(InvalidDocumentError):
            parse_document("[]")

    @pytest.mark.parametrize(
        "payload,field",
        [
            ({"pairwiseResults": []}, "steps"),
            ({"steps": []}, "pairwiseResults"),
            ({"steps": {}, "pairwiseResults": []}, "steps"),
            ({"steps": [], "pairwiseResults": "x"}, "pairwiseResults"),
        ],
    )
    def test_missing_or_wrong_collections(self, payload, field):
        with pytest.raises(InvalidDocumentError) as exc_info:
            parse_document(json.dumps(payload))
        assert exc_info.value.field == field

    def test_malformed_records(self):
        with pytest.raises(InvalidDocumentError, match="Invalid records"):
            parse_document(json.dumps({"steps": [{"children": []}], "pairwiseResults": []}))

    def test_legacy_flat_results(self):
        payload = {
            "steps": [
                {"id": "step-1", "name": "Browser", "children": [{"id": "child-1", "value": "Chrome", "color": "green"}]},
            ],
            "pairwiseResults": [
                {
                    "Browser": "Chrome",
                    "Description": "Browser: Chrome",
                    "_colors": {"Browser": "green"},
                },
            ],
        }
        parsed = parse_document(json.dumps(payload))
        assert parsed.pairwise_results == (
            PairwiseResult(values={"Browser": "Chrome"}, description="Browser: Chrome", tags={"Browser": Tag.GREEN}),
        )
        assert parsed.steps[0].values[0].tag == Tag.GREEN

    def test_extra_fields_ignored(self):
        payload = {
            "steps": [{"id": "s", "name": "A", "children": [], "collapsed": True}],
            "pairwiseResults": [],
        }
        assert parse_document(json.dumps(payload)).steps[0].name == "A"


class TestFiles:
    """Tests for reading and writing document files."""

    def test_save_and_load(self, document, tmp_path):
        path = save_document(document, tmp_path / "nested" / "doc.json")
        assert path.exists()
        loaded = load_document(path)
        assert loaded.pairwise_results == document.pairwise_results

    def test_load_error_mentions_path(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(InvalidDocumentError) as exc_info:
            load_document(path)
        assert exc_info.value.context.path == str(path)


class TestStepDefinitions:
    """Tests for loading step definitions."""

    def test_load_yaml(self, steps_yaml):
        steps = load_steps(steps_yaml)
        assert [s.name for s in steps] == ["Browser", "OS", "Login"]
        assert [v.value for v in steps[0].values] == ["Chrome", "Firefox"]
        assert steps[0].values[0].tag == Tag.GREEN
        assert steps[0].values[1].tag == Tag.YELLOW
        assert steps[2].values == ()

    def test_load_json_document(self, document, tmp_path):
        path = save_document(document, tmp_path / "doc.json")
        assert load_steps(path) == list(document.steps)

    def test_scalar_values_become_strings(self):
        steps = parse_steps({"steps": [{"name": "Count", "values": [0, 1, 2.5]}]})
        assert [v.value for v in steps[0].values] == ["0", "1", "2.5"]

    def test_step_given_as_name(self):
        (step,) = parse_steps({"steps": ["Login"]})
        assert step == Step(id=step.id, name="Login")

    def test_children_alias(self):
        (step,) = parse_steps({"steps": [{"name": "A", "children": [{"value": "x", "color": "red"}]}]})
        assert step.values[0].tag == Tag.RED

    def test_missing_steps_key(self):
        with pytest.raises(InvalidDocumentError, match="'steps' list"):
            parse_steps({"stages": []})

    def test_values_must_be_list(self):
        with pytest.raises(InvalidDocumentError, match="must be a list"):
            parse_steps({"steps": [{"name": "A", "values": "x"}]})

    def test_invalid_tag(self):
        with pytest.raises(InvalidDocumentError, match="Invalid step #1"):
            parse_steps({"steps": [{"name": "A", "values": [{"value": "x", "color": "blue"}]}]})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("steps: [unclosed", encoding="utf-8")
        with pytest.raises(InvalidDocumentError, match="Invalid YAML"):
            load_steps(path)


class TestUnreadableFiles:
    """Tests for files that are not valid UTF-8."""

    def test_document_with_invalid_bytes(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"steps": [], "pairwiseResults": []}\xff')
        with pytest.raises(InvalidDocumentError, match="Could not read") as exc_info:
            load_document(path)
        assert exc_info.value.context.path == str(path)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_steps_with_invalid_bytes(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"steps:\n  - name: \xff\n")
        with pytest.raises(InvalidDocumentError, match="Could not read"):
            load_steps(path)

    def test_unreadable_path(self, tmp_path):
        with pytest.raises(InvalidDocumentError, match="Could not read"):
            load_document(tmp_path)


class TestStepNamedValues:
    """Flat result records whose step is literally called 'values'."""

    def test_flat_record_with_values_step(self):
        payload = {
            "steps": [{"id": "step-1", "name": "values", "children": []}],
            "pairwiseResults": [
                {"values": "values", "Description": "values", "_colors": {"values": "yellow"}},
            ],
        }
        parsed = parse_document(json.dumps(payload))
        assert parsed.pairwise_results == (
            PairwiseResult(values={"values": "values"}, description="values", tags={"values": Tag.YELLOW}),
        )

    def test_current_shape_with_values_step_round_trips(self):
        result = PairwiseResult(values={"values": "x", "OS": "Mac"}, description="values: x | OS: Mac")
        document = PairwiseDocument(pairwise_results=[result])
        assert parse_document(dump_document(document)).pairwise_results == (result,)
