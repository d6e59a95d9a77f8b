import pytest

from kredis.errors import (
    EmptyInputError,
    IntegerFieldError,
    KredisError,
    LineError,
    MalformedAddressError,
    MultipleSelfNodesError,
    NoSelfNodeError,
    ParseError,
    PartError,
    QueryError,
    TooFewFieldsError,
    TooManyComponentsError,
    UncoveredSlotError,
    UnknownFlagError,
    UnknownFormatError,
)


@pytest.mark.parametrize(
    "error, expect_types",
    [
        (EmptyInputError("empty"), (ParseError, ValueError)),
        (MalformedAddressError("x"), (ParseError, ValueError)),
        (UnknownFormatError("1-2-3"), (ParseError, ValueError)),
        (TooManyComponentsError("a:b:c", ["c"]), (ParseError, ValueError)),
        (UnknownFlagError("bogus"), (ParseError, ValueError)),
        (IntegerFieldError("epoch", ValueError("x")), (ParseError, ValueError)),
        (TooFewFieldsError("a b", 2), (ParseError, ValueError)),
        (LineError(1, EmptyInputError()), (ParseError, ValueError)),
        (PartError(1, EmptyInputError()), (ParseError, ValueError)),
        (NoSelfNodeError(), (QueryError, LookupError)),
        (MultipleSelfNodesError(["a", "b"]), (QueryError, LookupError)),
        (UncoveredSlotError(1), (QueryError, LookupError)),
    ],
)
def test_error_hierarchy(error, expect_types):
    assert isinstance(error, KredisError)
    assert isinstance(error, expect_types)


def test_line_error_message():
    error = LineError(3, UnknownFlagError("bogus"))

    assert error.index == 3
    assert str(error) == "parsing line 3 of cluster nodes: unrecognized flag 'bogus'"


def test_too_many_components_message():
    error = TooManyComponentsError("a:b:c", ["c"])

    assert str(error) == "parsing 'a:b:c': too many components: ['c']"
