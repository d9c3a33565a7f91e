"""
Tests for Q nodes and the OData filter compiler.
"""

import pytest

from querycodec.exceptions import InvalidFieldError
from querycodec.querydsl import Q
from querycodec.querydsl.compilers import BaseFilterCompiler, ODataFilterCompiler, odata_filter
from querycodec.querydsl.compilers.utils import normalize_where_input, property_path


class TestQToDict:
    """Universal dict representation of Q nodes."""

    def test_implicit_eq(self):
        assert Q(name="x").to_dict() == {"name": {"$eq": "x"}}

    def test_lookup(self):
        assert Q(age__ge=18).to_dict() == {"age": {"$gte": 18}}

    def test_gte_alias(self):
        assert Q(age__gte=18).to_dict() == Q(age__ge=18).to_dict()

    def test_same_field_merges(self):
        assert Q(age__ge=18, age__le=30).to_dict() == {"age": {"$gte": 18, "$lte": 30}}

    def test_nested_field(self):
        assert Q(address__city="Paris").to_dict() == {"address.city": {"$eq": "Paris"}}

    def test_nested_field_with_lookup(self):
        assert Q(address__zip__in=["1", "2"]).to_dict() == {"address.zip": {"$in": ["1", "2"]}}

    def test_and_or(self):
        node = (Q(a=1) | Q(b=2)) & Q(c=3)
        assert node.to_dict() == {
            "$and": [
                {"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]},
                {"c": {"$eq": 3}},
            ]
        }

    def test_invert_does_not_mutate(self):
        q = Q(a=1)
        negated = ~q
        assert negated.to_dict() == {"$not": {"a": {"$eq": 1}}}
        assert q.to_dict() == {"a": {"$eq": 1}}

    def test_double_invert(self):
        assert (~~Q(a=1)).to_dict() == {"a": {"$eq": 1}}


class TestODataFilter:
    """OData $filter output."""

    def test_string_literal_is_escaped(self):
        assert Q(name="O'Brien").to_filter() == "name eq 'O''Brien'"

    def test_reserved_characters_are_escaped(self):
        assert Q(title="R&D / 50%").to_filter() == "title eq 'R%26D%20%2F%2050%25'"

    def test_range(self):
        assert (Q(age__ge=18) & Q(age__le=30)).to_filter() == "age ge 18 and age le 30"

    def test_range_in_one_node(self):
        assert Q(age__gte=18, age__lte=30).to_filter() == "age ge 18 and age le 30"

    def test_or(self):
        q = Q(status="active") | Q(status="pending")
        assert q.to_filter() == "status eq 'active' or status eq 'pending'"

    def test_not(self):
        assert (~Q(is_active=True)).to_filter() == "not (is_active eq true)"

    def test_not_compound(self):
        assert (~(Q(a=1) & Q(b=2))).to_filter() == "not (a eq 1 and b eq 2)"

    def test_compound_children_are_parenthesized(self):
        assert ((Q(a=1) | Q(b=2)) & Q(c=3)).to_filter() == "(a eq 1 or b eq 2) and c eq 3"

    def test_multi_field_leaf_is_parenthesized(self):
        assert (Q(a=1, b=2) | Q(c=3)).to_filter() == "(a eq 1 and b eq 2) or c eq 3"

    def test_negated_child_not_parenthesized_twice(self):
        assert (Q(a=1) & ~Q(b=2)).to_filter() == "a eq 1 and not (b eq 2)"

    def test_nested_property_path(self):
        assert Q(address__city="Paris").to_filter() == "address/city eq 'Paris'"

    def test_unknown_lookup_becomes_path(self):
        assert Q(name__foo=1).to_filter() == "name/foo eq 1"

    @pytest.mark.parametrize("key", ["age__between", "name__contains", "tag__nin", "info__lang__startswith"])
    def test_unsupported_lookup_raises(self, key):
        with pytest.raises(InvalidFieldError, match="is not supported") as exc_info:
            Q(**{key: 5}).to_filter()
        assert exc_info.value.details["lookup"] == key.rsplit("__", 1)[1]

    def test_in(self):
        assert Q(tag__in=["a b", "c"]).to_filter() == "tag in ('a%20b','c')"

    def test_in_with_numbers(self):
        assert Q(id__in=(1, 2, 3)).to_filter() == "id in (1,2,3)"

    def test_null(self):
        assert Q(owner=None).to_filter() == "owner eq null"

    def test_ne_and_gt_lt(self):
        assert Q(a__ne=1, b__gt=2, c__lt=3.5).to_filter() == "a ne 1 and b gt 2 and c lt 3.5"

    def test_str_is_filter(self):
        assert str(Q(a=1)) == "a eq 1"

    def test_repr(self):
        assert repr(Q(a=1)) == "<Q: {'a': {'$eq': 1}}>"

    def test_empty(self):
        assert Q().to_filter() == ""


class TestODataFilterCompiler:
    """Compiler entry points and errors."""

    def test_accepts_dict(self):
        assert odata_filter.to_filter({"a": {"$eq": "x"}}) == "a eq 'x'"

    def test_accepts_q(self):
        assert odata_filter.to_filter(Q(a="x")) == "a eq 'x'"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="must be a Q object or dict"):
            odata_filter.to_filter(5)

    def test_unsupported_operator(self):
        with pytest.raises(InvalidFieldError, match="not supported"):
            odata_filter.to_filter({"a": {"$regex": "x"}})

    def test_in_requires_list(self):
        with pytest.raises(InvalidFieldError, match="expects a list"):
            Q(tag__in="abc").to_filter()

    def test_is_base_compiler(self):
        assert isinstance(odata_filter, ODataFilterCompiler)
        assert isinstance(odata_filter, BaseFilterCompiler)


class TestCompilerUtils:
    """Tests for compiler helpers."""

    def test_normalize_q(self):
        assert normalize_where_input(Q(a=1)) == {"a": {"$eq": 1}}

    def test_normalize_dict(self):
        node = {"a": {"$eq": 1}}
        assert normalize_where_input(node) is node

    def test_property_path(self):
        assert property_path("a.b.c") == "a/b/c"
        assert property_path("plain") == "plain"
