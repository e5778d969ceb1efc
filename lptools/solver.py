"""Simplex method for linear programs in slack form."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from lptools.model import LinearProgram, LPState, Objective

_EPSILON = 1e-10


class SolverError(Exception):
    """Base class for errors raised while solving a linear program."""


class InfeasibleError(SolverError):
    """Raised when the initial tableau is not feasible."""


class UnboundedError(SolverError):
    """Raised when the objective can grow without limit."""


@dataclass
class SimplexTable:
    """A simplex tableau: constraint rows followed by the objective row.

    The last column of every row holds the right-hand side.
    """

    data: list[list[float]] = field(default_factory=list)
    basic_variables: list[int] = field(default_factory=list)

    def __str__(self) -> str:
        widths = [
            max(len(f"{value:.2f}") for value in column) for column in zip(*self.data)
        ]
        lines = ["Simplex Tableau:"]
        lines.append(
            "".join(f"{'x' + str(j + 1):>{width}} " for j, width in enumerate(widths))
        )
        for row in self.data:
            lines.append(
                "".join(f"{value:>{width}.2f} " for value, width in zip(row, widths))
            )
        return "\n".join(lines) + "\n"

    def initialize_tableau(self, problem: LinearProgram) -> None:
        """Build the initial tableau, bringing the problem to slack form first."""
        if problem.state != LPState.SLACK:
            problem.to_slack_form()

        m = problem.nb_constraints
        n = problem.nb_variables
        n_orig = n - m

        self.data = [
            [float(problem.constraint_coeff[i][j]) for j in range(n)]
            + [float(problem.rhs[i])]
            for i in range(m)
        ]
        self.data.append([-float(problem.obj_coeff[j]) for j in range(n)] + [0.0])
        self.basic_variables = [n_orig + i for i in range(m)]

    def find_entering_variable(self) -> int:
        """Return the first column with a negative objective coefficient, or -1."""
        objective_row = self.data[-1]
        for j, coefficient in enumerate(objective_row[:-1]):
            if coefficient < -_EPSILON:
                return j
        return -1

    def find_leaving_variable(self, pivot_col: int) -> int:
        """Return the row chosen by the minimum ratio test, or -1 if none."""
        smallest_ratio = math.inf
        pivot_row = -1
        for i, row in enumerate(self.data[:-1]):
            pivot_value = row[pivot_col]
            if pivot_value > _EPSILON:
                ratio = row[-1] / pivot_value
                if ratio >= -_EPSILON and ratio < smallest_ratio - _EPSILON:
                    smallest_ratio = ratio
                    pivot_row = i
        return pivot_row

    def perform_pivot(self, pivot_row: int, pivot_col: int) -> None:
        """Pivot the tableau on the given element."""
        pivot_element = self.data[pivot_row][pivot_col]
        normalized = [value / pivot_element for value in self.data[pivot_row]]
        self.data[pivot_row] = normalized
        for i, row in enumerate(self.data):
            if i == pivot_row:
                continue
            factor = row[pivot_col]
            self.data[i] = [value - factor * p for value, p in zip(row, normalized)]

    def is_initially_feasible(self) -> bool:
        """Return True if no constraint row has a negative right-hand side."""
        return all(row[-1] >= 0 for row in self.data[:-1])

    def extract_solution(self, problem: LinearProgram) -> list[float]:
        """Return the original variables' values followed by the objective value."""
        num_orig_vars = problem.nb_variables - problem.nb_constraints
        solution = [0.0] * num_orig_vars
        for row, basic in zip(self.data, self.basic_variables):
            if basic < num_orig_vars:
                solution[basic] = row[-1]
        solution.append(self.data[-1][-1])
        return solution


def solve(lp: LinearProgram) -> list[float]:
    """Solve the program with the simplex method.

    The solution is stored in ``lp.obj_var`` and also returned.
    """
    original_objective = lp.objective
    lp.to_slack_form()

    table = SimplexTable()
    table.initialize_tableau(lp)

    if not table.is_initially_feasible():
        raise InfeasibleError("infeasible problem")

    while True:
        pivot_col = table.find_entering_variable()
        if pivot_col == -1:
            solution = table.extract_solution(lp)
            if original_objective == Objective.MINIMIZE:
                solution[-1] *= -1
            lp.obj_var = solution
            lp.state = LPState.UNDEFINED
            return solution

        pivot_row = table.find_leaving_variable(pivot_col)
        if pivot_row == -1:
            raise UnboundedError("Unbounded")

        table.perform_pivot(pivot_row, pivot_col)
        table.basic_variables[pivot_row] = pivot_col