from dwr_status.utils.text import field_value, is_blank, normalize_ws, to_cell_str, trim_lr


class TestWhitespaceHelpers:
    """Tests for trim_lr / normalize_ws."""

    def test_trim_lr_keeps_internal_whitespace(self):
        assert trim_lr("  Field  Work \n") == "Field  Work"

    def test_normalize_ws_collapses_everything(self):
        assert normalize_ws("  site\n\nsurvey\t today  ") == "site survey today"

    def test_normalize_ws_empty(self):
        assert normalize_ws("   ") == ""


class TestToCellStr:
    """Tests for to_cell_str."""

    def test_none_is_empty(self):
        assert to_cell_str(None) == ""

    def test_nan_is_empty(self):
        assert to_cell_str(float("nan")) == ""

    def test_values_stringified_untrimmed(self):
        assert to_cell_str(" x ") == " x "
        assert to_cell_str(42) == "42"


class TestFieldValue:
    """Tests for field_value / is_blank."""

    def test_absent_field_reads_empty(self):
        assert field_value({"a": "1"}, "b") == ""

    def test_present_field(self):
        assert field_value({"a": 1}, "a") == "1"

    def test_is_blank(self):
        assert is_blank("")
        assert is_blank("  \t")
        assert is_blank(None)
        assert is_blank(float("nan"))
        assert not is_blank(" x ")
