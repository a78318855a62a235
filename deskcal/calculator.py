"""Pocket calculator with a single memory register.

Every operation takes a CalculatorState and returns a new one; nothing is
kept at module level. A failing operation raises and the caller keeps the
state it passed in.

Usage:
    state = evaluate(["12", "+", "30", "M+", "sqrt"])
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Iterable, Optional

from deskcal.models import CalculatorState, InvalidArgumentError, OutOfRangeError


def enter(state: CalculatorState, number: float) -> CalculatorState:
    return replace(state, value=float(number))


def add(state: CalculatorState, operand: float) -> CalculatorState:
    return replace(state, value=state.value + operand)


def subtract(state: CalculatorState, operand: float) -> CalculatorState:
    return replace(state, value=state.value - operand)


def multiply(state: CalculatorState, operand: float) -> CalculatorState:
    return replace(state, value=state.value * operand)


def divide(state: CalculatorState, divisor: float) -> CalculatorState:
    if divisor == 0:
        raise ZeroDivisionError("division by zero")
    return replace(state, value=state.value / divisor)


def modulo(state: CalculatorState, operand: float) -> CalculatorState:
    """Remainder with the sign of the current value (truncating, like fmod)."""
    if operand == 0:
        raise ZeroDivisionError("modulo by zero")
    if not math.isfinite(state.value):
        raise OutOfRangeError(f"modulo of non-finite value {state.value}")
    return replace(state, value=math.fmod(state.value, operand))


def reciprocal(state: CalculatorState) -> CalculatorState:
    if state.value == 0:
        raise ZeroDivisionError("reciprocal of zero")
    return replace(state, value=1 / state.value)


def square(state: CalculatorState) -> CalculatorState:
    return replace(state, value=state.value * state.value)


def square_root(state: CalculatorState) -> CalculatorState:
    if state.value < 0:
        raise OutOfRangeError(f"square root of negative number {state.value}")
    return replace(state, value=math.sqrt(state.value))


def memory_add(state: CalculatorState) -> CalculatorState:
    return replace(state, memory=state.memory + state.value)


def memory_subtract(state: CalculatorState) -> CalculatorState:
    return replace(state, memory=state.memory - state.value)


def memory_recall(state: CalculatorState) -> CalculatorState:
    return replace(state, value=state.memory)


# Key symbol -> (operation, number of operands it reads)
OPERATIONS: dict[str, tuple[Callable[..., CalculatorState], int]] = {
    "+": (add, 1),
    "-": (subtract, 1),
    "*": (multiply, 1),
    "/": (divide, 1),
    "%": (modulo, 1),
    "1/x": (reciprocal, 0),
    "x^2": (square, 0),
    "sqrt": (square_root, 0),
    "M+": (memory_add, 0),
    "M-": (memory_subtract, 0),
    "MR": (memory_recall, 0),
}


def parse_number(token: str) -> float:
    try:
        number = float(token)
    except ValueError:
        raise InvalidArgumentError(f"Invalid number: {token!r}") from None
    if math.isnan(number) or math.isinf(number):
        raise InvalidArgumentError(f"Invalid number: {token!r}")
    return number


def apply(state: CalculatorState, key: str, operand: Optional[float] = None) -> CalculatorState:
    """Apply one key to state. Binary keys require an operand.

    Raises OutOfRangeError when the result overflows to infinity.
    """
    if key not in OPERATIONS:
        raise InvalidArgumentError(f"Invalid operation or command: {key!r}")
    func, arity = OPERATIONS[key]
    if arity and operand is None:
        raise InvalidArgumentError(f"Operation {key!r} needs a number")
    try:
        result = func(state, operand) if arity else func(state)
    except OverflowError:
        raise OutOfRangeError(f"Result of {key!r} is out of range") from None
    if not (math.isfinite(result.value) and math.isfinite(result.memory)):
        raise OutOfRangeError(f"Result of {key!r} is out of range")
    return result


def evaluate(tokens: Iterable[str], state: Optional[CalculatorState] = None) -> CalculatorState:
    """Run a sequence of keys, starting from state (or a cleared calculator).

    A number replaces the current value; binary keys read the token that
    follows them as their operand.
    """
    state = state or CalculatorState()
    it = iter(tokens)
    for token in it:
        token = token.strip()
        if not token:
            continue
        if token in OPERATIONS:
            operand = None
            if OPERATIONS[token][1]:
                nxt = next(it, None)
                if nxt is None:
                    raise InvalidArgumentError(f"Operation {token!r} needs a number")
                operand = parse_number(nxt)
            state = apply(state, token, operand)
        else:
            state = enter(state, parse_number(token))
    return state
