"""Reading linear programs from JSON and writing them back."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any

from lptools.model import Comparison, LinearProgram, Objective

_VAR_RE = re.compile(r"([a-zA-Z]+\d*)", re.ASCII)
_COEFF_RE = re.compile(r"([+-]?)\s*(\d*\.?\d*)\s*\*?\s*([a-zA-Z]+\d*)", re.ASCII)
_COMP_RE = re.compile(r"[<>=]+")

_COMPARISON_BY_TEXT = {
    "<": Comparison.LO,
    "<=": Comparison.LE,
    ">": Comparison.BI,
    ">=": Comparison.BE,
    "=": Comparison.EQ,
}

_TEXT_BY_COMPARISON = {
    Comparison.EQ: "=",
    Comparison.LO: "<",
    Comparison.LE: "<=",
    Comparison.BI: ">",
    Comparison.BE: ">=",
}


class ParseError(ValueError):
    """Raised when a linear program cannot be read or written."""


def _field(obj: dict[str, Any], name: str) -> Any:
    if name in obj:
        return obj[name]
    lowered = name.lower()
    found = None
    for key, value in obj.items():
        if key.lower() == lowered:
            found = value
    return found


def _int_field(obj: dict[str, Any], name: str) -> int:
    value = _field(obj, name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"field {name!r} must be an integer")
    if value < 0:
        raise ParseError(f"field {name!r} must not be negative")
    return value


def _str_value(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"field {name!r} must be a string")
    return value


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _parse_number(text: str) -> float:
    if "_" in text:
        raise ValueError(text)
    return float(text)


def _parse_equation(equation: str, coeffs: list[float], var_map: dict[str, int]) -> None:
    for sign_text, number_text, name in _COEFF_RE.findall(equation):
        sign = -1.0 if sign_text == "-" else 1.0
        coeff = 1.0
        if number_text:
            try:
                coeff = _parse_number(number_text)
            except ValueError:
                coeff = 0.0
        index = var_map.get(name)
        if index is None:
            continue
        if index >= len(coeffs):
            raise ParseError(f"variable {name!r} exceeds the declared number of variables")
        coeffs[index] = sign * coeff


def parse(json_data: str) -> LinearProgram:
    """Build a linear program from its JSON description."""
    try:
        document = json.loads(json_data)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc)) from exc
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ParseError("linear program must be a JSON object")

    nb_variables = _int_field(document, "numberOfVariables")
    nb_constraints = _int_field(document, "numberOfConstraints")

    objective_function = _field(document, "objectiveFunction")
    if objective_function is None:
        objective_function = {}
    if not isinstance(objective_function, dict):
        raise ParseError("field 'objectiveFunction' must be an object")
    objective_text = _str_value(_field(objective_function, "objective"), "objective")
    equation = _str_value(_field(objective_function, "equasion"), "equasion")

    constraints = _field(document, "constraints")
    if constraints is None:
        constraints = []
    if not isinstance(constraints, list):
        raise ParseError("field 'constraints' must be a list")
    constraint_texts = [_str_value(c, "constraints") for c in constraints]
    if len(constraint_texts) > nb_constraints:
        raise ParseError("more constraints than declared")

    variable_names = _unique(_VAR_RE.findall(equation))
    var_map = {name: i for i, name in enumerate(variable_names)}

    objective = Objective.MINIMIZE if objective_text.lower() == "minimize" else Objective.MAXIMIZE
    obj_coeff = [0.0] * nb_variables
    _parse_equation(equation, obj_coeff, var_map)

    constraint_coeff = [[0.0] * nb_variables for _ in range(nb_constraints)]
    rhs = [0.0] * nb_constraints
    comparisons = [Comparison.EQ] * nb_constraints

    for i, text in enumerate(constraint_texts):
        parts = _COMP_RE.split(text)
        found = _COMP_RE.search(text)
        comp_text = found.group(0) if found else ""
        comparison = _COMPARISON_BY_TEXT.get(comp_text)
        if comparison is None:
            raise ParseError(f"invalid comparison operator: {comp_text}")
        comparisons[i] = comparison
        _parse_equation(parts[0], constraint_coeff[i], var_map)
        rhs_text = parts[1].strip()
        try:
            rhs[i] = _parse_number(rhs_text)
        except ValueError as exc:
            raise ParseError(f"invalid right-hand side: {rhs_text!r}") from exc

    return LinearProgram(
        nb_constraints=nb_constraints,
        nb_variables=nb_variables,
        variable_names=variable_names,
        objective=objective,
        obj_coeff=obj_coeff,
        comparisons=comparisons,
        constraint_coeff=constraint_coeff,
        rhs=rhs,
    )


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def equation_to_string(coeffs, var_names, slack_variable_names) -> str:
    """Render coefficients as terms such as ``3*x1 +5*x2``."""
    names = list(var_names) + list(slack_variable_names)
    parts: list[str] = []
    for coeff, name in zip(coeffs, names):
        if coeff == 0:
            continue
        text = _format_float(coeff)
        if parts and coeff > 0:
            text = "+" + text
        parts.append(f"{text}*{name}")
    return " ".join(parts)


def comparison_to_string(comp) -> str:
    """Return the operator text of a comparison."""
    text = _TEXT_BY_COMPARISON.get(comp)
    if text is None:
        raise ParseError(f"invalid comparison operator: {int(comp)}")
    return text


def convert_lp_to_json(lp: LinearProgram) -> str:
    """Write a linear program in the JSON form read by :func:`parse`."""
    constraints = [
        " ".join(
            (
                equation_to_string(
                    lp.constraint_coeff[i], lp.variable_names, lp.slack_variable_names
                ),
                comparison_to_string(lp.comparisons[i]),
                _format_float(lp.rhs[i]),
            )
        )
        for i in range(lp.nb_constraints)
    ]
    document = {
        "numberOfVariables": lp.nb_variables,
        "numberOfConstraints": lp.nb_constraints,
        "objectiveFunction": {
            "objective": "minimize" if lp.objective == Objective.MINIMIZE else "maximize",
            "equasion": equation_to_string(
                lp.obj_coeff, lp.variable_names, lp.slack_variable_names
            ),
        },
        "constraints": constraints,
    }
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"