"""Tests for the AppState snapshot and the use-case parameter union."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from unistate.exceptions import InvalidParametersError
from unistate.models import AppState, BalanceParameter, ExampleParameter, parse_parameter

# ------------------------------------------------------------------
# AppState
# ------------------------------------------------------------------


class TestAppState:
    def test_defaults(self) -> None:
        state = AppState()
        assert state.current_user is None
        assert state.current_balance == 0.0

    @pytest.mark.parametrize(
        ("original", "user", "balance", "expected_user", "expected_balance"),
        [
            (None, None, None, None, 0.0),
            (None, "Ana", None, "Ana", 0.0),
            (None, None, 12.5, None, 12.5),
            (AppState(current_user="Oscar", current_balance=500), None, None, "Oscar", 500.0),
            (AppState(current_user="Oscar", current_balance=500), "Ana", None, "Ana", 500.0),
            (AppState(current_user="Oscar", current_balance=500), None, 42.0, "Oscar", 42.0),
            (AppState(current_user="Oscar", current_balance=500), "Ana", 0.0, "Ana", 0.0),
        ],
    )
    def test_derive_precedence(
        self,
        original: AppState | None,
        user: str | None,
        balance: float | None,
        expected_user: str | None,
        expected_balance: float,
    ) -> None:
        state = AppState.derive(original, current_user=user, current_balance=balance)
        assert state.current_user == expected_user
        assert state.current_balance == expected_balance

    def test_derive_does_not_touch_original(self) -> None:
        original = AppState(current_user="Oscar", current_balance=1)
        derived = AppState.derive(original, current_balance=2)
        assert original.current_balance == 1
        assert derived is not original

    def test_none_override_cannot_clear_user(self) -> None:
        original = AppState(current_user="Oscar")
        assert AppState.derive(original, current_user=None).current_user == "Oscar"

    def test_is_frozen(self) -> None:
        state = AppState()
        with pytest.raises(ValidationError):
            state.current_balance = 10  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            AppState(balance=1)  # type: ignore[call-arg]

    def test_camel_case_aliases(self) -> None:
        state = AppState.model_validate({"currentUser": "Oscar", "currentBalance": 3})
        assert state.current_user == "Oscar"
        assert state.model_dump(by_alias=True) == {"currentUser": "Oscar", "currentBalance": 3.0}


# ------------------------------------------------------------------
# Parameters
# ------------------------------------------------------------------


class TestParameters:
    def test_variants_carry_their_kind(self) -> None:
        assert BalanceParameter(value=500).kind == "balance"
        assert ExampleParameter(text="hi", number=2).kind == "example"

    def test_parse_balance(self) -> None:
        parameter = parse_parameter({"kind": "balance", "value": "500"})
        assert isinstance(parameter, BalanceParameter)
        assert parameter.value == 500.0

    def test_parse_example(self) -> None:
        parameter = parse_parameter({"kind": "example", "text": "hi", "number": 7})
        assert parameter == ExampleParameter(text="hi", number=7)

    @pytest.mark.parametrize(
        "payload",
        [
            {"kind": "unknown", "value": 1},
            {"value": 1},
            {"kind": "balance"},
            {"kind": "balance", "value": "lots"},
            {"kind": "example", "text": "hi"},
        ],
    )
    def test_parse_rejects_bad_payloads(self, payload: dict[str, object]) -> None:
        with pytest.raises(InvalidParametersError) as exc_info:
            parse_parameter(payload)
        assert exc_info.value.expected is not None
        assert "balance" in exc_info.value.expected

    def test_parameters_are_frozen(self) -> None:
        parameter = BalanceParameter(value=1)
        with pytest.raises(ValidationError):
            parameter.value = 2  # type: ignore[misc]
