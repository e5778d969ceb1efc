"""Linear program representation and conversions between standard forms."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import IntEnum


class Objective(IntEnum):
    """Direction of optimisation."""

    MINIMIZE = 0
    MAXIMIZE = 1


class Comparison(IntEnum):
    """Relation between the left and right side of a constraint."""

    EQ = 0  # =
    LO = 1  # <
    LE = 2  # <=
    BI = 3  # >
    BE = 4  # >=


class LPState(IntEnum):
    """Form the linear program is currently in."""

    UNDEFINED = 0
    CANONICAL = 1
    SLACK = 2


class SolutionUnavailableError(Exception):
    """Raised when a solution is requested before the program was solved."""


def multiply_row(row: list[float], scalar: float) -> list[float]:
    """Return a new row with every element multiplied by ``scalar``."""
    return [value * scalar for value in row]


_FLIPPED = {
    Comparison.LE: Comparison.BE,
    Comparison.BE: Comparison.LE,
    Comparison.LO: Comparison.BI,
    Comparison.BI: Comparison.LO,
}


def flip_comparison(comp: Comparison) -> Comparison:
    """Return the comparison obtained by multiplying both sides by -1."""
    return _FLIPPED.get(comp, comp)


def _json_number(value: float) -> float | int:
    if math.isfinite(value) and float(value).is_integer() and abs(value) < 1e21:
        return int(value)
    return value


@dataclass
class LinearProgram:
    """A linear programming problem and, once solved, its solution."""

    nb_constraints: int = 0
    nb_variables: int = 0
    variable_names: list[str] = field(default_factory=list)
    slack_variable_names: list[str] = field(default_factory=list)
    objective: Objective = Objective.MINIMIZE
    obj_var: list[float] | None = None
    obj_coeff: list[float] = field(default_factory=list)
    comparisons: list[Comparison] = field(default_factory=list)
    constraint_coeff: list[list[float]] = field(default_factory=list)
    rhs: list[float] = field(default_factory=list)
    state: LPState = LPState.UNDEFINED

    def solution_json(self) -> str:
        """Return the solution as a compact JSON object with sorted keys."""
        if self.obj_var is None:
            raise SolutionUnavailableError("solution not available")
        solution = {name: self.obj_var[i] for i, name in enumerate(self.variable_names)}
        solution["objective"] = self.obj_var[-1]
        return json.dumps(
            {key: _json_number(value) for key, value in solution.items()},
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )

    def to_canonical_form(self) -> None:
        """Convert to a maximisation problem with only <= constraints."""
        if self.state != LPState.UNDEFINED:
            return
        self.ensure_maximization()
        self.ensure_non_negative_rhs()
        self.convert_to_le_constraints()
        self.state = LPState.CANONICAL

    def to_slack_form(self) -> None:
        """Convert to equality constraints by adding slack variables."""
        if self.state == LPState.SLACK:
            return
        if self.state == LPState.UNDEFINED:
            self.to_canonical_form()
        self.convert_to_equalities()
        self.state = LPState.SLACK

    def ensure_maximization(self) -> None:
        """Turn a minimisation into the equivalent maximisation."""
        if self.objective == Objective.MINIMIZE:
            self.objective = Objective.MAXIMIZE
            self.obj_coeff = [-c for c in self.obj_coeff]

    def ensure_non_negative_rhs(self) -> None:
        """Negate every constraint whose right-hand side is negative."""
        for i, value in enumerate(self.rhs):
            if value < 0:
                self.rhs[i] = -value
                self.constraint_coeff[i] = multiply_row(self.constraint_coeff[i], -1)
                self.comparisons[i] = flip_comparison(self.comparisons[i])

    def convert_to_le_constraints(self) -> None:
        """Rewrite every constraint as one or two <= constraints."""
        new_coeff: list[list[float]] = []
        new_rhs: list[float] = []
        rows = zip(
            self.comparisons[: self.nb_constraints],
            self.constraint_coeff,
            self.rhs,
        )
        for comp, row, rhs in rows:
            if comp in (Comparison.LE, Comparison.LO, Comparison.EQ):
                new_coeff.append(list(row))
                new_rhs.append(rhs)
            if comp in (Comparison.BE, Comparison.BI, Comparison.EQ):
                new_coeff.append(multiply_row(row, -1))
                new_rhs.append(-rhs)
        self.constraint_coeff = new_coeff
        self.rhs = new_rhs
        self.comparisons = [Comparison.LE] * len(new_coeff)
        self.nb_constraints = len(new_coeff)

    def convert_to_equalities(self) -> None:
        """Add a slack or surplus variable to every inequality."""
        for i in range(self.nb_constraints):
            comp = self.comparisons[i]
            if comp in (Comparison.LE, Comparison.LO):
                self.add_slack_variable(i)
            elif comp in (Comparison.BE, Comparison.BI):
                self.add_surplus_variable(i)

    def _add_auxiliary_variable(self, constraint_index: int, sign: float) -> None:
        self.nb_variables += 1
        self.slack_variable_names.append(f"s{len(self.slack_variable_names) + 1}")
        self.obj_coeff.append(0.0)
        for i, row in enumerate(self.constraint_coeff):
            row.append(sign if i == constraint_index else 0.0)
        self.comparisons[constraint_index] = Comparison.EQ

    def add_slack_variable(self, constraint_index: int) -> None:
        """Add a slack variable (+1) to the given constraint."""
        self._add_auxiliary_variable(constraint_index, 1.0)

    def add_surplus_variable(self, constraint_index: int) -> None:
        """Add a surplus variable (-1) to the given constraint."""
        self._add_auxiliary_variable(constraint_index, -1.0)