"""Tests for supersetdiff comparison classification."""

import io

import pytest
from supersetdiff import (
    DiffEngine,
    Difference,
    Number,
    Options,
    compare,
    compare_streams,
    compare_values,
    decimal_equal,
    float_epsilon_equal,
    ConfigurationError,
)


COMPARE_CASES = [
    ('{"a": 5}', '["a"]', Difference.NO_MATCH),
    ('{"a": 5}', '{"a": 6}', Difference.NO_MATCH),
    ('{"a": 5}', '{"a": true}', Difference.NO_MATCH),
    ('{"a": 5}', '{"a": 5}', Difference.FULL_MATCH),
    ('{"a": 5}', '{"a": 5, "b": 6}', Difference.NO_MATCH),
    ('{"a": 5, "b": 6}', '{"a": 5}', Difference.SUPERSET_MATCH),
    ('{"a": 5, "b": 6}', '{"b": 6}', Difference.SUPERSET_MATCH),
    ('{"a": null}', '{"a": 1}', Difference.NO_MATCH),
    ('{"a": null}', '{"a": null}', Difference.FULL_MATCH),
    ('{"a": "null"}', '{"a": null}', Difference.NO_MATCH),
    ('{"a": 3.1415}', '{"a": 3.14156}', Difference.NO_MATCH),
    ('{"a": 3.1415}', '{"a": 3.1415}', Difference.FULL_MATCH),
    ('{"a": 4213123123}', '{"a": "4213123123"}', Difference.NO_MATCH),
    ('{"a": 4213123123}', '{"a": 4213123123}', Difference.FULL_MATCH),
    ('[1, 2, 3]', '[1, 2]', Difference.SUPERSET_MATCH),
    ('[1, 2]', '[1, 2, 3]', Difference.NO_MATCH),
    ('{}', '{}', Difference.FULL_MATCH),
    ('[]', '[]', Difference.FULL_MATCH),
    ('"text"', '"text"', Difference.FULL_MATCH),
    ('true', 'false', Difference.NO_MATCH),
    ('null', 'null', Difference.FULL_MATCH),
]


class TestCompare:
    """Test classification of document pairs."""

    @pytest.mark.parametrize("a,b,expected", COMPARE_CASES)
    def test_compare(self, a, b, expected):
        """Test classification of text documents."""
        difference, _ = compare(a, b)
        assert difference == expected

    @pytest.mark.parametrize("a,b,expected", COMPARE_CASES)
    def test_compare_bytes(self, a, b, expected):
        """Test classification of byte documents."""
        difference, _ = compare(a.encode(), b.encode())
        assert difference == expected

    @pytest.mark.parametrize("a,b,expected", COMPARE_CASES)
    def test_compare_streams(self, a, b, expected):
        """Test classification of binary streams."""
        result = compare_streams(io.BytesIO(a.encode()), io.BytesIO(b.encode()))
        assert result.difference == expected

    def test_compare_text_streams(self):
        """Test comparison of text streams."""
        result = compare_streams(io.StringIO('{"a": [1, 2]}'), io.StringIO('{"a": [1]}'))
        assert result.difference == Difference.SUPERSET_MATCH

    @pytest.mark.parametrize("doc", [
        '{"a": [1, {"b": null}], "c": "d"}',
        '[]',
        '{}',
        '0',
        '"<<PRESENCE>>"',
        '[[[]], {"x": {"y": [true, false]}}]',
    ])
    def test_reflexive(self, doc):
        """A document always fully matches itself."""
        assert compare(doc, doc).difference == Difference.FULL_MATCH

    def test_asymmetry(self):
        """Swapping arguments turns a superset into a mismatch."""
        a = '{"a": 1, "b": [1, 2]}'
        b = '{"a": 1, "b": [1]}'
        assert compare(a, b).difference == Difference.SUPERSET_MATCH
        assert compare(b, a).difference == Difference.NO_MATCH

    def test_no_match_dominates(self):
        """A single mismatch anywhere wins over superset content elsewhere."""
        a = '{"extra": 1, "nested": {"deep": [1, 2, {"x": 1}]}, "same": true}'
        b = '{"nested": {"deep": [1, 2, {"x": 2}]}, "same": true}'
        assert compare(a, b).difference == Difference.NO_MATCH

    def test_superset_in_nested_array(self):
        """Test a superset match nested inside an array."""
        a = '{"items": [{"id": 1, "tag": "x"}, {"id": 2}]}'
        b = '{"items": [{"id": 1}]}'
        assert compare(a, b).difference == Difference.SUPERSET_MATCH

    def test_result_helpers(self):
        """Test the ComparisonResult helper properties."""
        result = compare('{"a": 1, "b": 2}', '{"a": 1}')
        assert result.is_superset is True
        assert result.is_match is False
        assert result.is_valid is True
        assert result.to_dict()["difference"] == "SupersetMatch"

    def test_difference_names(self):
        """Test Difference names and lookup by name."""
        assert str(Difference.FULL_MATCH) == "FullMatch"
        assert str(Difference.BOTH_INVALID) == "BothArgsAreInvalidJson"
        assert Difference.from_name("NoMatch") == Difference.NO_MATCH
        assert Difference.from_name("SUPERSET_MATCH") == Difference.SUPERSET_MATCH
        with pytest.raises(ValueError):
            Difference.from_name("Whatever")


class TestInvalidInput:
    """Test decode failures."""

    def test_first_invalid(self):
        """Test that an invalid first document is reported."""
        result = compare('{"a":', '{}')
        assert result.difference == Difference.FIRST_INVALID
        assert result.text == "first argument is invalid json"
        assert result.is_valid is False

    def test_second_invalid(self):
        """Test that an invalid second document is reported."""
        result = compare('{}', '[1,')
        assert result.difference == Difference.SECOND_INVALID
        assert result.text == "second argument is invalid json"

    def test_both_invalid(self):
        """Test that two invalid documents are reported together."""
        result = compare('nope', '')
        assert result.difference == Difference.BOTH_INVALID
        assert result.text == "both arguments are invalid json"

    @pytest.mark.parametrize("doc", ["NaN", "Infinity", "-Infinity", '{"a": NaN}'])
    def test_non_standard_constants_rejected(self, doc):
        """Test that NaN and Infinity are rejected."""
        assert compare(doc, "1").difference == Difference.FIRST_INVALID

    def test_trailing_data_rejected(self):
        """Test that data after the top-level value is rejected."""
        assert compare('{} {}', '{}').difference == Difference.FIRST_INVALID

    def test_invalid_utf8(self):
        """Test that invalid UTF-8 is rejected."""
        assert compare(b'"\xff"', b'"a"').difference == Difference.FIRST_INVALID

    def test_utf8_bom_accepted(self):
        """Test that a UTF-8 byte order mark is accepted."""
        assert compare(b'\xef\xbb\xbf{"a": 1}', b'{"a": 1}').difference == Difference.FULL_MATCH

    def test_invalid_stream(self):
        """Test that an invalid stream is reported."""
        result = compare_streams(io.BytesIO(b'{'), io.BytesIO(b'{'))
        assert result.difference == Difference.BOTH_INVALID


class TestPresence:
    """Test the <<PRESENCE>> marker on the expected side."""

    @pytest.mark.parametrize("a,b,expected", [
        ('{"name": "John", "age": 30}',
         '{"name": "<<PRESENCE>>", "age": "<<PRESENCE>>"}', Difference.FULL_MATCH),
        ('{"name": "John"}',
         '{"name": "<<PRESENCE>>", "age": "<<PRESENCE>>"}', Difference.NO_MATCH),
        ('["value1", "value2", "value3"]',
         '["<<PRESENCE>>", "<<PRESENCE>>", "<<PRESENCE>>"]', Difference.FULL_MATCH),
        ('["value1", "value2"]',
         '["<<PRESENCE>>", "<<PRESENCE>>", "<<PRESENCE>>"]', Difference.NO_MATCH),
        ('{"name": "John", "age": 30, "city": "NYC"}',
         '{"name": "<<PRESENCE>>", "age": 30, "city": "<<PRESENCE>>"}', Difference.FULL_MATCH),
        ('{"name": "John", "age": 25, "city": "NYC"}',
         '{"name": "<<PRESENCE>>", "age": 30, "city": "<<PRESENCE>>"}', Difference.NO_MATCH),
    ])
    def test_presence(self, a, b, expected):
        """Test presence marker classification."""
        assert compare(a, b).difference == expected

    @pytest.mark.parametrize("a,b,expected", [
        ('{"name": "John", "age": 30, "city": "NYC", "country": "USA"}',
         '{"name": "<<PRESENCE>>", "age": "<<PRESENCE>>"}', Difference.SUPERSET_MATCH),
        ('{"user": {"name": "John", "email": "john@example.com"}, "status": "active"}',
         '{"user": "<<PRESENCE>>", "status": "<<PRESENCE>>"}', Difference.FULL_MATCH),
        ('{"user": {"name": "John"}, "status": "active"}',
         '{"user": {"name": "<<PRESENCE>>", "email": "<<PRESENCE>>"}, "status": "<<PRESENCE>>"}',
         Difference.NO_MATCH),
        ('["value1", "value2", "value3", "value4"]',
         '["<<PRESENCE>>", "<<PRESENCE>>"]', Difference.SUPERSET_MATCH),
        ('{"users": [{"name": "John"}, {"name": "Jane"}], "count": 2}',
         '{"users": "<<PRESENCE>>", "count": "<<PRESENCE>>"}', Difference.FULL_MATCH),
        ('{}', '{"required": "<<PRESENCE>>"}', Difference.NO_MATCH),
        ('[]', '["<<PRESENCE>>"]', Difference.NO_MATCH),
    ])
    def test_partial_matches(self, a, b, expected):
        """Test presence markers mixed with exact values."""
        assert compare(a, b).difference == expected

    def test_explicit_null_is_not_present(self):
        """Test that an explicit null fails a presence check."""
        result = compare('{"field": null}', '{"field": "<<PRESENCE>>"}')
        assert result.difference == Difference.NO_MATCH

    @pytest.mark.parametrize("value", ['false', '0', '""', '[]', '{}'])
    def test_falsy_values_are_present(self, value):
        """Test that falsy values satisfy a presence check."""
        result = compare(f'{{"field": {value}}}', '{"field": "<<PRESENCE>>"}')
        assert result.difference == Difference.FULL_MATCH

    def test_marker_on_both_sides(self):
        """Test the marker appearing on both sides."""
        result = compare('{"message": "<<PRESENCE>>"}', '{"message": "<<PRESENCE>>"}')
        assert result.difference == Difference.FULL_MATCH

    def test_marker_on_first_side_is_literal(self):
        """Test that the marker on the first side is an ordinary string."""
        result = compare('{"message": "<<PRESENCE>>"}', '{"message": "hello"}')
        assert result.difference == Difference.NO_MATCH

    def test_deeply_nested(self):
        """Test presence markers deep inside a document."""
        a = '{"level1": {"level2": {"level3": {"value": "exists"}}}}'
        b = '{"level1": {"level2": {"level3": {"value": "<<PRESENCE>>"}}}}'
        assert compare(a, b).difference == Difference.FULL_MATCH

    def test_mixed_array_kinds(self):
        """Test presence markers in arrays of mixed kinds."""
        a = '[1, "string", true, {"key": "value"}, [1,2,3]]'
        b = '["<<PRESENCE>>", "<<PRESENCE>>", "<<PRESENCE>>", "<<PRESENCE>>", "<<PRESENCE>>"]'
        assert compare(a, b).difference == Difference.FULL_MATCH

    def test_renders_first_side(self):
        """Test that presence checks render the first side's value."""
        result = compare('{"name": "John"}', '{"name": "<<PRESENCE>>"}', Options(indent="  "))
        assert result.text == '{\n  "name": "John"\n}'


class TestNumbers:
    """Test number comparison."""

    def test_literal_by_default(self):
        """Test that numbers compare by literal by default."""
        assert compare('{"a": 1.0}', '{"a": 1.00}').difference == Difference.NO_MATCH
        assert compare('{"a": 1e2}', '{"a": 100}').difference == Difference.NO_MATCH

    def test_decimal_override(self):
        """Test the decimal number comparator."""
        options = Options(compare_numbers=decimal_equal)
        assert compare('{"a": 1.0}', '{"a": 1.00}', options).difference == Difference.FULL_MATCH
        assert compare('{"a": 1e2}', '{"a": 100}', options).difference == Difference.FULL_MATCH
        assert compare('{"a": 1.5}', '{"a": 1.50001}', options).difference == Difference.NO_MATCH

    @pytest.mark.parametrize("a,b,expected", [
        ('{"a": 3.1415926535897}', '{"a": 3.141592653589700000000001}', Difference.FULL_MATCH),
        ('{"a": 3.1415926535897}', '{"a": 3.1415926535898}', Difference.NO_MATCH),
        ('{"a": 1}', '{"a": 1.0000000000000000000000001}', Difference.FULL_MATCH),
        ('{"a": 1.0}', '{"a": 1.0000000000000000000000001}', Difference.FULL_MATCH),
        # The scaled epsilon breaks down next to zero.
        ('{"a": 0.0}', '{"a": 0.0000000000000000000000000000000000000000000001}', Difference.NO_MATCH),
        ('{"a": 1e2}', '{"a": 10e1}', Difference.FULL_MATCH),
        ('{"a": 0}', '{"a": 0.0}', Difference.FULL_MATCH),
        # Literals beyond the float range are compared as text.
        ('{"a": 1e400}', '{"a": 2e400}', Difference.NO_MATCH),
        ('{"a": 1e400}', '{"a": 1e400}', Difference.FULL_MATCH),
        ('{"a": -1e400}', '{"a": -3e999}', Difference.NO_MATCH),
    ])
    def test_float_epsilon_override(self, a, b, expected):
        """Test the float epsilon number comparator."""
        options = Options(compare_numbers=float_epsilon_equal)
        assert compare(a, b, options).difference == expected

    def test_custom_comparator_receives_literals(self):
        """Test that a custom comparator receives Number literals."""
        seen = []

        def record(a, b):
            seen.append((a, b))
            return True

        compare('[1.50]', '[2]', Options(compare_numbers=record))
        assert seen == [(Number("1.50"), Number("2"))]

    def test_number_keeps_literal(self):
        """Test that Number keeps its literal text."""
        number = Number("1.250")
        assert str(number) == "1.250"
        assert number.to_float() == 1.25
        assert str(number.to_decimal()) == "1.250"


class TestExclusion:
    """Test exclusion of subtrees by predicate and by JSONPath."""

    def test_skip_predicate(self):
        """Test exclusion by the skip predicate."""
        options = Options(skip=lambda path, a, b: path == "meta.id")
        a = '{"meta": {"id": 1, "v": 2}}'
        b = '{"meta": {"id": 3, "v": 2}}'
        assert compare(a, b).difference == Difference.NO_MATCH
        assert compare(a, b, options).difference == Difference.FULL_MATCH

    def test_skip_predicate_paths(self):
        """Paths are dotted object keys; array elements reuse their array's path."""
        seen = []

        def record(path, a, b):
            seen.append(path)
            return False

        compare('{"x": [{"y": 1}]}', '{"x": [{"y": 1}]}', Options(skip=record))
        assert seen == ["x", "x", "x.y"]

    def test_skip_predicate_not_called_for_root(self):
        """Test that the skip predicate is never called for the root."""
        seen = []
        compare('[1]', '[2]', Options(skip=lambda path, a, b: seen.append(path) or True))
        assert seen == []

    def test_ignore_paths(self):
        """Test exclusion by JSONPath expressions."""
        a = '{"id": 1, "updatedAt": "t1", "items": [{"updatedAt": "t2", "n": 1}]}'
        b = '{"id": 1, "updatedAt": "t9", "items": [{"updatedAt": "t3", "n": 1}]}'
        options = Options(ignore_paths=("$..updatedAt",))
        assert compare(a, b).difference == Difference.NO_MATCH
        assert compare(a, b, options).difference == Difference.FULL_MATCH

    def test_ignore_paths_one_sided(self):
        """Test that ignore_paths also excludes one-sided entries."""
        a = '{"id": 1, "meta": {"requestId": "abc"}}'
        b = '{"id": 1}'
        options = Options(ignore_paths=("$.meta",))
        assert compare(a, b).difference == Difference.SUPERSET_MATCH
        assert compare(a, b, options).difference == Difference.FULL_MATCH

    def test_invalid_jsonpath(self):
        """Test that an unparseable JSONPath raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            compare('{}', '{}', Options(ignore_paths=("$.foo[",)))

    @pytest.mark.parametrize("expression", ["$.items[0].id", "$.items[1:3]", "$..items[0]", "$.a[0].b[*].c"])
    def test_positional_jsonpath_rejected(self, expression):
        """Test that expressions picking array elements by position are refused."""
        a = '{"items": [{"id": 1}, {"id": 2}]}'
        b = '{"items": [{"id": 1}, {"id": 3}]}'
        with pytest.raises(ConfigurationError, match="by position"):
            compare(a, b, Options(ignore_paths=(expression,)))

    def test_wildcard_jsonpath_covers_every_element(self):
        """Test that [*] excludes a field in every array element."""
        a = '{"items": [{"id": 1, "n": 1}, {"id": 2, "n": 2}]}'
        b = '{"items": [{"id": 1, "n": 1}, {"id": 3, "n": 2}]}'
        options = Options(ignore_paths=("$.items[*].id",))
        assert compare(a, b).difference == Difference.NO_MATCH
        assert compare(a, b, options).difference == Difference.FULL_MATCH


class TestCompareValues:
    """Test comparison of already decoded Python values."""

    def test_values(self):
        """Test comparison of decoded Python values."""
        engine = DiffEngine()
        assert engine.compare_values({"a": 1.5, "b": [1, None]}, {"a": 1.5}).difference == \
            Difference.SUPERSET_MATCH

    def test_int_and_float_literals_differ(self):
        """Test that int and float values keep distinct literals."""
        assert compare_values({"a": 1}, {"a": 1.0}).difference == Difference.NO_MATCH

    def test_unsupported_value(self):
        """Test that values with no JSON form are reported as invalid."""
        assert compare_values({"a": {1, 2}}, {}).difference == Difference.FIRST_INVALID
        assert compare_values({}, {1: "x"}).difference == Difference.SECOND_INVALID

    def test_mixed_text_and_values(self):
        """Test that text and decoded values are handled one side at a time."""
        engine = DiffEngine()
        assert engine.compare_any('{"a": 1, "b": 2}', {"a": 1}).difference == Difference.SUPERSET_MATCH
        assert engine.compare_any({"a": [1, 2]}, b'{"a": [1, 2]}').difference == Difference.FULL_MATCH
        assert engine.compare_any('{"a": 1}', {"a": 2}).difference == Difference.NO_MATCH

    def test_mixed_invalid_sides(self):
        """Test that each side of a mixed comparison reports its own decode failure."""
        engine = DiffEngine()
        assert engine.compare_any("{oops", {"a": 1}).difference == Difference.FIRST_INVALID
        assert engine.compare_any({"a": 1}, {"b": {1}}).difference == Difference.SECOND_INVALID
