import pytest

from fogpack.array import ArrayValidator
from fogpack.validators import AnyValidator, BoolValidator, ValidationError


def test_default_serializes_to_empty_map():
    assert ArrayValidator().to_dict() == {}


def test_default_passes_any_array():
    value = [1, "a", None, [True]]
    assert ArrayValidator().validate(value) == value


def test_rejects_non_array():
    with pytest.raises(ValidationError, match="Expected Array, got Int"):
        ArrayValidator().validate(5)


def test_length_limits():
    validator = ArrayValidator(max_len=2, min_len=1)
    assert validator.validate([1, 2]) == [1, 2]
    with pytest.raises(ValidationError, match="longer than maximum"):
        validator.validate([1, 2, 3])
    with pytest.raises(ValidationError, match="shorter than minimum"):
        validator.validate([])


def test_in_and_nin_lists():
    validator = ArrayValidator(in_list=[[1, 2], [3]])
    assert validator.validate([3]) == [3]
    with pytest.raises(ValidationError, match="not on `in` list"):
        validator.validate([2])
    with pytest.raises(ValidationError, match="not on `in` list"):
        validator.validate([True])
    nin = ArrayValidator(nin_list=[[1, 2]])
    with pytest.raises(ValidationError, match="is on `nin` list"):
        nin.validate([1, 2])
    assert nin.validate([2, 1]) == [2, 1]


def test_unique():
    validator = ArrayValidator(unique=True)
    assert validator.validate([1, 2, 3]) == [1, 2, 3]
    assert validator.validate([1, True]) == [1, True]
    with pytest.raises(ValidationError, match="unique"):
        validator.validate([1, 2, 1])


def test_prefix_and_items():
    validator = ArrayValidator(
        prefix=[BoolValidator(val=True)], items=BoolValidator(val=False)
    )
    assert validator.validate([True, False, False]) == [True, False, False]
    with pytest.raises(ValidationError, match="required value"):
        validator.validate([False])
    with pytest.raises(ValidationError, match="required value"):
        validator.validate([True, True])


def test_contains():
    validator = ArrayValidator(
        contains=[BoolValidator(val=True), BoolValidator(val=False)]
    )
    assert validator.validate([1, False, True]) == [1, False, True]
    with pytest.raises(ValidationError) as info:
        validator.validate([True, 3])
    assert str(info.value) == "Array was missing items satisfying `contains` list: 1"
    with pytest.raises(ValidationError) as info:
        validator.validate([])
    assert str(info.value) == (
        "Array was missing items satisfying `contains` list: 0, 1"
    )


def test_same_len():
    validator = ArrayValidator(same_len={0, 1})
    assert validator.validate([[1, 2], [3, 4]]) == [[1, 2], [3, 4]]
    assert validator.validate([None, None]) == [None, None]
    with pytest.raises(ValidationError, match="expected array of length 1"):
        validator.validate([[1], [3, 4]])
    with pytest.raises(ValidationError, match="the one at 1 is not"):
        validator.validate([[1], None])
    with pytest.raises(ValidationError, match="not all"):
        validator.validate([None, [1]])
    with pytest.raises(ValidationError, match="array or null at index 0"):
        validator.validate([1, [2]])


def test_query_check_defaults():
    validator = ArrayValidator()
    assert validator.query_check(ArrayValidator())
    assert validator.query_check(AnyValidator())
    assert not validator.query_check(BoolValidator())
    assert not validator.query_check(ArrayValidator(in_list=[[1]]))
    assert not validator.query_check(ArrayValidator(max_len=3))
    assert not validator.query_check(ArrayValidator(unique=True))
    assert not validator.query_check(ArrayValidator(same_len={0}))


def test_query_check_permissions():
    validator = ArrayValidator(query=True, size=True, unique_ok=True)
    assert validator.query_check(ArrayValidator(in_list=[[1]], max_len=3, unique=True))
    assert validator.query_check([ArrayValidator(min_len=1), ArrayValidator()])
    assert not validator.query_check([ArrayValidator(), BoolValidator()])


def test_query_check_items():
    validator = ArrayValidator(array=True, items=BoolValidator())
    assert validator.query_check(ArrayValidator(items=BoolValidator()))
    assert not validator.query_check(ArrayValidator(items=BoolValidator(val=True)))
    assert not validator.query_check(
        ArrayValidator(prefix=[BoolValidator(val=True)])
    )
    allowed = ArrayValidator(array=True, items=BoolValidator(query=True))
    assert allowed.query_check(ArrayValidator(prefix=[BoolValidator(val=True)]))


def test_query_check_contains():
    validator = ArrayValidator(contains_ok=True, items=BoolValidator())
    assert validator.query_check(ArrayValidator(contains=[BoolValidator()]))
    assert not validator.query_check(
        ArrayValidator(contains=[BoolValidator(val=False)])
    )
    assert not ArrayValidator().query_check(ArrayValidator(contains=[AnyValidator()]))


def test_to_dict_nested():
    validator = ArrayValidator(
        items=BoolValidator(val=True), max_len=3, same_len={2, 0}, unique=True
    )
    assert validator.to_dict() == {
        "items": {"Bool": {"val": True}},
        "max_len": 3,
        "same_len": [0, 2],
        "unique": True,
    }