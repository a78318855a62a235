"""Tests for the calculator operations and key-sequence evaluation."""

import pytest

from deskcal import calculator
from deskcal.calculator import evaluate
from deskcal.models import CalculatorState, InvalidArgumentError, OutOfRangeError


@pytest.fixture
def state():
    return CalculatorState(value=10.0)


# --- Basic arithmetic ---

def test_add(state):
    assert calculator.add(state, 5).value == pytest.approx(15.0)


def test_subtract(state):
    assert calculator.subtract(state, 4).value == pytest.approx(6.0)


def test_multiply(state):
    assert calculator.multiply(state, 2.5).value == pytest.approx(25.0)


def test_divide(state):
    assert calculator.divide(state, 4).value == pytest.approx(2.5)


def test_operations_do_not_mutate(state):
    calculator.add(state, 5)
    assert state.value == 10.0


# --- Unary operations ---

def test_square():
    assert calculator.square(CalculatorState(value=-3)).value == pytest.approx(9.0)


def test_square_root():
    assert calculator.square_root(CalculatorState(value=16)).value == pytest.approx(4.0)


def test_reciprocal():
    assert calculator.reciprocal(CalculatorState(value=4)).value == pytest.approx(0.25)


def test_modulo_follows_dividend_sign():
    assert calculator.modulo(CalculatorState(value=7), 3).value == pytest.approx(1.0)
    assert calculator.modulo(CalculatorState(value=-7), 3).value == pytest.approx(-1.0)
    assert calculator.modulo(CalculatorState(value=5.5), 2).value == pytest.approx(1.5)


# --- Errors ---

def test_division_by_zero(state):
    with pytest.raises(ZeroDivisionError):
        calculator.divide(state, 0)


def test_reciprocal_of_zero():
    with pytest.raises(ZeroDivisionError):
        calculator.reciprocal(CalculatorState())


def test_modulo_by_zero(state):
    with pytest.raises(ZeroDivisionError):
        calculator.modulo(state, 0)


def test_square_root_negative():
    with pytest.raises(OutOfRangeError):
        calculator.square_root(CalculatorState(value=-1))


# --- Memory register ---

def test_memory_add_subtract_recall():
    s = CalculatorState(value=5)
    s = calculator.memory_add(s)
    s = calculator.memory_add(s)
    assert s.memory == pytest.approx(10.0)
    s = calculator.enter(s, 3)
    s = calculator.memory_subtract(s)
    assert s.memory == pytest.approx(7.0)
    s = calculator.enter(s, 0)
    s = calculator.memory_recall(s)
    assert s.value == pytest.approx(7.0)


# --- Key sequences ---

def test_evaluate_sequence():
    s = evaluate(["12", "+", "30", "M+", "x^2"])
    assert s.value == pytest.approx(1764.0)
    assert s.memory == pytest.approx(42.0)


def test_evaluate_negative_number():
    assert evaluate(["-5", "-", "-3"]).value == pytest.approx(-2.0)


def test_evaluate_from_existing_state():
    s = evaluate(["MR", "sqrt"], CalculatorState(value=1, memory=81))
    assert s.value == pytest.approx(9.0)


def test_evaluate_reciprocal_and_modulo():
    assert evaluate(["8", "1/x"]).value == pytest.approx(0.125)
    assert evaluate(["17", "%", "5"]).value == pytest.approx(2.0)


def test_evaluate_empty_is_cleared_state():
    assert evaluate([]) == CalculatorState()


def test_evaluate_unknown_token():
    with pytest.raises(InvalidArgumentError):
        evaluate(["2", "^", "3"])


def test_evaluate_missing_operand():
    with pytest.raises(InvalidArgumentError):
        evaluate(["2", "+"])


def test_evaluate_bad_operand():
    with pytest.raises(InvalidArgumentError):
        evaluate(["2", "*", "abc"])


def test_evaluate_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        evaluate(["1", "/", "0"])


def test_apply_requires_operand():
    with pytest.raises(InvalidArgumentError):
        calculator.apply(CalculatorState(), "+")


# --- Overflow ---

def test_overflow_rejected():
    with pytest.raises(OutOfRangeError):
        evaluate(["1e308", "*", "10"])


def test_square_overflow_rejected():
    with pytest.raises(OutOfRangeError):
        evaluate(["1e200", "x^2"])


def test_memory_overflow_rejected():
    with pytest.raises(OutOfRangeError):
        evaluate(["1.5e308", "M+", "M+"])


def test_modulo_of_infinite_value():
    with pytest.raises(OutOfRangeError):
        calculator.modulo(CalculatorState(value=float("inf")), 3)


def test_failed_step_leaves_input_state():
    s = CalculatorState(value=1e308)
    with pytest.raises(OutOfRangeError):
        calculator.apply(s, "*", 10)
    assert s.value == 1e308
