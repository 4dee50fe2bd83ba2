import pytest

from fogpack.array import ArrayValidator
from fogpack.regexes import count_regexes
from fogpack.validators import BoolValidator

STR_RE = {"Str": {"matches": "^a+$"}}
STR_PLAIN = {"Str": {"max_len": 4}}


def test_single_string_regex():
    assert count_regexes(STR_RE) == 1
    assert count_regexes(STR_PLAIN) == 0


@pytest.mark.parametrize(
    "value",
    [None, 3, "Str", [STR_RE], {}, {"Str": {"matches": "x"}, "Bin": {}}],
)
def test_non_validators_count_nothing(value):
    assert count_regexes(value) == 0


def test_non_map_inner_counts_nothing():
    assert count_regexes({"Map": 1}) == 0
    assert count_regexes({"Array": [STR_RE]}) == 0
    assert count_regexes({"Hash": "x"}) == 0
    assert count_regexes({"Str": "x"}) == 0


def test_multi_sums_members():
    multi = {"Multi": [STR_RE, STR_PLAIN, STR_RE]}
    assert count_regexes(multi) == 2 * count_regexes(STR_RE)


def test_enum_sums_variants():
    enum = {"Enum": {"A": STR_RE, "B": None, "C": STR_RE}}
    assert count_regexes(enum) == count_regexes({"Multi": [STR_RE, STR_RE]})


def test_map_counts_keys_req_opt_values():
    inner = {
        "keys": {"matches": "k"},
        "req": {"a": STR_RE},
        "opt": {"b": STR_RE},
        "values": STR_RE,
    }
    total = count_regexes({"Map": inner})
    parts = [
        count_regexes({"Map": {"keys": {"matches": "k"}}}),
        count_regexes({"Map": {"req": {"a": STR_RE}}}),
        count_regexes({"Map": {"opt": {"b": STR_RE}}}),
        count_regexes({"Map": {"values": STR_RE}}),
    ]
    assert all(part == count_regexes(STR_RE) for part in parts)
    assert total == sum(parts)


def test_array_counts_contains_items_prefix():
    contains_only = count_regexes({"Array": {"contains": [STR_RE]}})
    items_only = count_regexes({"Array": {"items": STR_RE}})
    prefix_only = count_regexes({"Array": {"prefix": [STR_RE, STR_RE]}})
    total = count_regexes(
        {"Array": {"contains": [STR_RE], "items": STR_RE, "prefix": [STR_RE, STR_RE]}}
    )
    assert contains_only == items_only == count_regexes(STR_RE)
    assert prefix_only == 2 * count_regexes(STR_RE)
    assert total == contains_only + items_only + prefix_only


def test_hash_link_and_nesting():
    nested = {"Hash": {"link": {"Array": {"items": {"Multi": [STR_RE]}}}}}
    assert count_regexes(nested) == count_regexes(STR_RE)


def test_array_validator_dict_has_no_regexes():
    validator = ArrayValidator(items=BoolValidator(), prefix=[BoolValidator()])
    assert count_regexes({"Array": validator.to_dict()}) == 0