"""
Unit tests for the parameter set builder
"""

import pytest

from ocrspace.models.errors import ErrorCode, OcrSpaceError, ValidationError
from ocrspace.models.parameters import OPTION_FIELDS, ParameterSet


class TestParameterSet:
    """Fluent setters and form field serialization"""

    @pytest.fixture
    def params(self):
        return ParameterSet(api_key="key")

    def test_setters_return_same_instance(self, params):
        result = (
            params.set_language("eng")
            .set_overlay_required(True)
            .set_filetype("PNG")
            .set_detect_orientation(False)
            .set_create_searchable_pdf(True)
            .set_searchable_pdf_hide_text_layer(False)
            .set_scale(True)
            .set_table(True)
            .set_ocr_engine(2)
        )
        assert result is params

    def test_no_fields_when_nothing_set(self, params):
        assert params.form_fields() == []

    @pytest.mark.parametrize("setter,value,expected", [
        ("set_language", "eng", ("language", "eng")),
        ("set_overlay_required", True, ("isOverlayRequired", "true")),
        ("set_filetype", "PDF", ("filetype", "PDF")),
        ("set_detect_orientation", False, ("detectOrientation", "false")),
        ("set_create_searchable_pdf", True, ("isCreateSearchablePdf", "true")),
        ("set_searchable_pdf_hide_text_layer", True, ("isSearchablePdfHideTextLayer", "true")),
        ("set_scale", False, ("scale", "false")),
        ("set_table", True, ("isTable", "true")),
        ("set_ocr_engine", "1", ("OCREngine", "1")),
    ])
    def test_single_field_serialization(self, params, setter, value, expected):
        getattr(params, setter)(value)
        assert params.form_fields() == [expected]

    def test_unset_fields_never_serialized(self, params):
        params.set_language("auto").set_table(True)
        names = [name for name, _ in params.form_fields()]

        assert names == ["language", "isTable"]
        for absent in ("isOverlayRequired", "filetype", "detectOrientation", "isCreateSearchablePdf",
                       "isSearchablePdfHideTextLayer", "scale", "OCREngine"):
            assert absent not in names

    def test_last_write_wins(self, params):
        params.set_scale(True).set_scale(False)
        assert params.form_fields() == [("scale", "false")]

    def test_none_clears_field(self, params):
        params.set_language("eng").set_language(None)
        assert params.form_fields() == []

    def test_numeric_engine_is_stringified(self, params):
        params.set_ocr_engine(2)
        assert params.ocr_engine == "2"
        assert params.form_fields() == [("OCREngine", "2")]

    def test_non_string_language_is_stringified(self, params):
        params.set_language(5)
        assert params.form_fields() == [("language", "5")]

    def test_non_bool_flag_raises_package_error(self, params):
        params.set_table(True)

        with pytest.raises(ValidationError) as exc_info:
            params.set_table("yes")

        assert isinstance(exc_info.value, OcrSpaceError)
        assert exc_info.value.error_code == ErrorCode.INVALID_PARAMETER
        assert exc_info.value.details["field"] == "table"
        assert params.table is True

    def test_integer_flag_is_not_coerced(self, params):
        with pytest.raises(ValidationError):
            params.set_scale(1)
        assert params.form_fields() == []

    def test_searchable_pdf_does_not_imply_overlay(self, params):
        params.set_create_searchable_pdf(True)
        assert params.overlay_required is None
        assert ("isOverlayRequired", "true") not in params.form_fields()

    def test_no_semantic_validation(self, params):
        params.set_language("not-a-language").set_ocr_engine("99").set_filetype("XYZ")
        assert dict(params.form_fields()) == {
            "language": "not-a-language",
            "OCREngine": "99",
            "filetype": "XYZ",
        }

    def test_all_fields_in_fixed_order(self, params):
        (params.set_ocr_engine(1).set_table(True).set_scale(True)
         .set_searchable_pdf_hide_text_layer(True).set_create_searchable_pdf(True)
         .set_detect_orientation(True).set_filetype("PNG").set_overlay_required(True)
         .set_language("eng"))

        names = [name for name, _ in params.form_fields()]
        assert len(names) == len(OPTION_FIELDS)
        assert names == [
            "language", "isOverlayRequired", "filetype", "detectOrientation",
            "isCreateSearchablePdf", "isSearchablePdfHideTextLayer", "scale", "isTable", "OCREngine",
        ]

    def test_copy_is_independent(self, params):
        params.set_language("eng")
        snapshot = params.copy()
        params.set_language("fre")

        assert snapshot.language == "eng"
        assert snapshot.api_key == params.api_key
        assert snapshot.transport is params.transport

    def test_api_key_hidden_from_repr(self):
        params = ParameterSet(api_key="secret-value")
        assert "secret-value" not in repr(params)
