"""Unit tests for the schema normalizer."""

import logging

import pytest

from prompt_builder.template_engine.models import DateKind, MultilineKind, Step, TextKind
from prompt_builder.template_engine.normalizer import DEFAULT_TITLE, normalize, normalize_step


@pytest.fixture
def demo_document():
    """The canonical single-step demo document."""
    return {
        "prompt_name": "Demo",
        "templates": [
            {
                "template": {
                    "phase": "Intro",
                    "form": [{"item": {"name": "x", "input": "text", "default": "hi"}}],
                    "prompt": "Hello {{x}}!",
                }
            }
        ],
    }


class TestNormalize:
    """Test suite for normalize()."""

    def test_demo_document(self, demo_document):
        document = normalize(demo_document)

        assert document.title == "Demo"
        assert len(document.steps) == 1
        step = document.steps[0]
        assert step.phase == "Intro"
        assert step.template == "Hello {{x}}!"
        assert [(f.name, f.default_value, f.kind) for f in step.fields] == [("x", "hi", TextKind())]

    def test_missing_steps_key(self):
        """Test that a document without 'templates' has no steps and the default title."""
        document = normalize({})

        assert document.title == DEFAULT_TITLE
        assert document.steps == ()

    @pytest.mark.parametrize("raw", [None, "text", 42, ["a", "b"]])
    def test_non_mapping_document(self, raw):
        """Test that any non-mapping input degrades to an empty document."""
        document = normalize(raw)

        assert document.title == DEFAULT_TITLE
        assert document.steps == ()

    @pytest.mark.parametrize("templates", [None, "oops", {"template": {}}, 3])
    def test_malformed_steps_list(self, templates):
        document = normalize({"prompt_name": "T", "templates": templates})

        assert document.title == "T"
        assert document.steps == ()

    def test_custom_default_title(self):
        assert normalize({"prompt_name": ""}, default_title="Untitled").title == "Untitled"

    def test_step_order_preserved(self):
        document = normalize(
            {"templates": [{"template": {"phase": p}} for p in ("one", "two", "three")]}
        )

        assert [s.phase for s in document.steps] == ["one", "two", "three"]

    def test_document_is_immutable(self, demo_document):
        document = normalize(demo_document)

        with pytest.raises(Exception):
            document.title = "changed"


class TestNormalizeStep:
    """Test suite for normalize_step()."""

    @pytest.mark.parametrize("entry", [None, "step", {}, {"template": None}, {"other": 1}])
    def test_unusable_entry_becomes_empty_step(self, entry):
        assert normalize_step(entry) == Step()

    def test_bare_step_mapping_is_accepted(self):
        step = normalize_step({"phase": "P", "prompt": "{{a}}", "form": [{"item": {"name": "a"}}]})

        assert step.phase == "P"
        assert step.field_names == ("a",)

    def test_form_not_a_list(self):
        step = normalize_step({"template": {"form": {"item": {"name": "a"}}, "prompt": "x"}})

        assert step.fields == ()
        assert step.template == "x"

    def test_field_kinds(self):
        step = normalize_step(
            {
                "template": {
                    "form": [
                        {"item": {"name": "notes", "input": "multiline_text"}},
                        {"item": {"name": "when", "input": "date(YYYY-MM-DD)"}},
                    ]
                }
            }
        )

        assert [f.kind for f in step.fields] == [MultilineKind(), DateKind(hint="YYYY-MM-DD")]

    def test_nameless_fields_skipped(self):
        step = normalize_step(
            {"template": {"form": [{"item": {"input": "text"}}, {"item": {"name": "ok"}}, None]}}
        )

        assert step.field_names == ("ok",)

    def test_duplicate_field_keeps_first(self, caplog):
        """Test that a repeated name within a step keeps the first declaration."""
        with caplog.at_level(logging.WARNING):
            step = normalize_step(
                {
                    "template": {
                        "form": [
                            {"item": {"name": "a", "default": "first"}},
                            {"item": {"name": "a", "default": "second"}},
                        ]
                    }
                },
                step_index=4,
            )

        assert [f.default_value for f in step.fields] == ["first"]
        assert "duplicate field 'a'" in caplog.text

    def test_non_string_scalars_are_stringified(self):
        step = normalize_step({"template": {"phase": 2, "prompt": 10}})

        assert step.phase == "2"
        assert step.template == "10"
