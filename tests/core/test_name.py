import pytest

from unique_sentinel._core.name import QualifiedName
from unique_sentinel.exceptions import InvalidNameError


class TestQualifiedName:
    """
    parse
    """

    def test_parse_with_bare_name_return_qualified_name(self):
        name = QualifiedName.parse("Demo")
        assert name.value == "Demo"
        assert name.module is None
        assert name.short_name == "Demo"
        assert str(name) == "Demo"

    def test_parse_with_dotted_name_return_qualified_name(self):
        name = QualifiedName.parse("pkg.module.MISSING")
        assert name.module == "pkg.module"
        assert name.components == ("pkg", "module", "MISSING")
        assert name.short_name == "MISSING"

    def test_parse_with_colon_return_qualified_name(self):
        name = QualifiedName.parse("pkg.module:Config.UNSET")
        assert name.module == "pkg.module"
        assert name.components == ("Config", "UNSET")
        assert name.short_name == "UNSET"

    @pytest.mark.parametrize(
        "value",
        (
            "",
            " ",
            "Demo ",
            "pkg..MISSING",
            "pkg.",
            ".MISSING",
            ":MISSING",
            "pkg:",
            "pkg:mod:MISSING",
            "pkg.1st",
            "with-dash",
        ),
    )
    def test_parse_with_malformed_name_raise_invalid_name_error(self, value):
        with pytest.raises(InvalidNameError) as info:
            QualifiedName.parse(value)

        assert info.value.name == value

    def test_parse_with_non_string_raise_invalid_name_error(self):
        with pytest.raises(InvalidNameError):
            QualifiedName.parse(None)

    def test_invalid_name_error_is_value_error(self):
        with pytest.raises(ValueError):
            QualifiedName.parse("")

    """
    default_repr
    """

    def test_default_repr_with_success_return_short_name_in_angle_brackets(self):
        assert QualifiedName.parse("Demo").default_repr == "<Demo>"
        assert QualifiedName.parse("a.b.MISSING").default_repr == "<MISSING>"

    """
    import_candidates
    """

    def test_import_candidates_with_bare_name_return_nothing(self):
        assert tuple(QualifiedName.parse("Demo").import_candidates) == ()

    def test_import_candidates_with_dotted_name_return_prefixes(self):
        name = QualifiedName.parse("pkg.module.Class.MISSING")
        assert tuple(name.import_candidates) == (
            "pkg.module.Class",
            "pkg.module",
            "pkg",
        )

    def test_import_candidates_with_colon_return_module(self):
        name = QualifiedName.parse("pkg.module:Class.MISSING")
        assert tuple(name.import_candidates) == ("pkg.module",)
