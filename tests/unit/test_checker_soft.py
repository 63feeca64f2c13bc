"""Unit tests for the checker in soft (collecting) mode."""

from __future__ import annotations

from optionoids.checker import Checker
from optionoids.errors import (
    ErrorKind,
    ExpectedMultipleKeys,
    MissingKeys,
    RequiredDataUnavailable,
    UnexpectedBlankValue,
    UnexpectedKeys,
    UnexpectedMultipleKeys,
    UnexpectedNilValue,
    UnexpectedNonNilValue,
    UnexpectedPopulatedValue,
    UnexpectedValueType,
    UnexpectedValueVariant,
)


def _soft(options: dict[str, object], **kwargs: object) -> Checker:
    return Checker(options, hard=False, **kwargs)  # type: ignore[arg-type]


def _kinds(checker: Checker) -> list[ErrorKind]:
    return [error.kind for error in checker.errors]


def test_clean_chain_reports_nothing() -> None:
    checker = _soft({"a": "x", "b": 2}, keys=["a", "b"]).required().that("b").of_type(int)

    assert checker.errors == ()
    assert checker.failed is False


def test_populated_then_of_type_collects_both_in_order() -> None:
    checker = _soft({"a": 1, "b": None}).populated().of_type(str)

    assert [type(error) for error in checker.errors] == [UnexpectedBlankValue, UnexpectedValueType]
    blank, wrong_type = checker.errors
    assert blank.keys == ("b",)
    assert wrong_type.keys == ("a",)
    assert checker.failed is True


def test_checks_return_the_checker_after_failures() -> None:
    checker = _soft({"a": 1, "b": 2})

    assert checker.just_one() is checker
    assert checker.only_these("a") is checker
    assert checker.nil_values() is checker


def test_exist_without_filter_reports_required_data_unavailable() -> None:
    checker = _soft({"a": 1}).exist()

    assert len(checker.errors) == 1
    error = checker.errors[0]
    assert isinstance(error, RequiredDataUnavailable)
    assert error.check == "present"


def test_exist_reports_missing_keys() -> None:
    checker = _soft({"a": 1}, keys=["a", "b"]).exist()

    assert isinstance(checker.errors[0], MissingKeys)
    assert checker.errors[0].keys == ("b",)


def test_required_runs_both_checks() -> None:
    checker = _soft({"a": ""}, keys=["a", "b"]).required()

    assert _kinds(checker) == [ErrorKind.MISSING_KEYS, ErrorKind.UNEXPECTED_BLANK_VALUE]


def test_only_these() -> None:
    assert _soft({"a": 1, "b": 2}).only_these(["a", "b", "c"]).errors == ()

    checker = _soft({"a": 1, "b": 2, "c": 3}).only_these(["a", "b"])
    assert isinstance(checker.errors[0], UnexpectedKeys)
    assert checker.errors[0].keys == ("c",)


def test_only_these_with_no_allowed_keys_flags_every_key_in_view() -> None:
    checker = _soft({"a": 1, "b": 2}).only_these()

    assert checker.errors[0].keys == ("a", "b")


def test_value_population_checks() -> None:
    checker = (
        _soft({"a": None, "b": "", "c": 1, "d": False})
        .populated()
        .blank()
        .not_nil_values()
        .nil_values()
    )

    populated, blank, not_nil, nil = checker.errors
    assert isinstance(populated, UnexpectedBlankValue)
    assert populated.keys == ("a", "b")
    assert isinstance(blank, UnexpectedPopulatedValue)
    assert blank.keys == ("c", "d")
    assert isinstance(not_nil, UnexpectedNilValue)
    assert not_nil.keys == ("a",)
    assert isinstance(nil, UnexpectedNonNilValue)
    assert nil.keys == ("b", "c", "d")


def test_key_count_checks() -> None:
    assert _soft({"a": 1}).one_or_none().errors == ()
    assert _soft({"a": 1, "b": 2}).that("c").one_or_none().errors == ()
    assert _kinds(_soft({"a": 1, "b": 2}).one_or_none()) == [ErrorKind.UNEXPECTED_MULTIPLE_KEYS]

    assert _soft({"a": 1, "b": 2}, keys=["a"]).one_or_more().errors == ()
    assert isinstance(_soft({}).one_or_more().errors[0], ExpectedMultipleKeys)


def test_just_one_on_empty_view_reports_a_single_error() -> None:
    checker = _soft({"a": 1}).that("c").just_one()

    assert _kinds(checker) == [ErrorKind.REQUIRED_DATA_UNAVAILABLE]
    assert checker.errors[0].check == "one_required"


def test_just_one_with_multiple_keys() -> None:
    checker = _soft({"a": 1, "b": 2}).just_one()

    assert isinstance(checker.errors[0], UnexpectedMultipleKeys)
    assert checker.errors[0].keys == ("a", "b")
    assert _soft({"a": 1, "b": 2}, keys=["a"]).just_one().errors == ()


def test_types_and_variants() -> None:
    checker = (
        _soft({"a": 1, "b": [], "c": None})
        .of_types(int, str)
        .possible_values([1, 2])
    )

    wrong_type, wrong_variant = checker.errors
    assert isinstance(wrong_type, UnexpectedValueType)
    assert wrong_type.keys == ("b",)
    assert isinstance(wrong_variant, UnexpectedValueVariant)
    assert wrong_variant.keys == ("b",)
    assert wrong_variant.variants == (1, 2)


def test_possible_values_with_dict_keys() -> None:
    modes = {"r": 1, "w": 2}

    assert _soft({"a": "r"}).possible_values(modes.keys()).errors == ()

    checker = _soft({"a": "x"}).possible_values(modes.keys())
    assert isinstance(checker.errors[0], UnexpectedValueVariant)
    assert checker.errors[0].variants == ("r", "w")


def test_flag_reports_nil_not_blank() -> None:
    checker = _soft({"a": None, "b": False}).flag()

    assert _kinds(checker) == [ErrorKind.UNEXPECTED_NIL_VALUE]
    assert checker.errors[0].keys == ("a",)


def test_identifier_collects_type_and_blank_failures() -> None:
    checker = _soft({"a": 7, "b": ""}).identifier()

    assert _kinds(checker) == [
        ErrorKind.UNEXPECTED_VALUE_TYPE,
        ErrorKind.UNEXPECTED_BLANK_VALUE,
    ]


def test_passing_checks_leave_view_unchanged() -> None:
    checker = _soft({"a": 1, "b": 2}, keys=["a"]).not_nil_values().exist().just_one()

    assert checker.errors == ()
    assert checker.current_options() == {"a": 1}


def test_errors_is_a_snapshot() -> None:
    checker = _soft({}).one_or_more()
    snapshot = checker.errors

    checker.one_or_more()

    assert len(snapshot) == 1
    assert len(checker.errors) == 2
