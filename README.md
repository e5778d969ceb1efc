# lptools

A small library for linear programs. It reads a problem described in JSON,
rewrites it into canonical and slack form, and solves it with the simplex
method using Bland's rule.

## Installation

```
pip install .
```

## Describing a problem

Problems are JSON documents:

```json
{
  "numberOfVariables": 2,
  "numberOfConstraints": 3,
  "objectiveFunction": {
    "objective": "maximize",
    "equasion": "3*x1 + 5*x2"
  },
  "constraints": [
    "x1 <= 4",
    "2*x2 <= 12",
    "3*x1 + 2*x2 <= 18"
  ]
}
```

- Variable names are taken from the objective equation, in the order in
  which they first appear. A variable that occurs only in a constraint is
  ignored.
- The supported comparison operators are `<`, `<=`, `>`, `>=` and `=`.
- Any objective other than `minimize` (in any letter case) is treated as
  maximisation.
- A term may be written `3*x1`, `3 x1`, `3x1` or just `x1`; the coefficient
  defaults to 1.

## Usage

```python
from lptools.parsing import parse, convert_lp_to_json
from lptools.solver import solve, InfeasibleError, UnboundedError

with open("problem.json") as fh:
    lp = parse(fh.read())

try:
    values = solve(lp)          # [2.0, 6.0, 36.0]
except UnboundedError:
    print("the problem is unbounded")
except InfeasibleError:
    print("the starting basis is not feasible")
else:
    print(lp.solution_json())   # {"objective":36,"x1":2,"x2":6}
```

`solve` returns the values of the original variables followed by the
objective value, and also stores that list in `lp.obj_var`. For a
minimisation the objective value is reported with its original sign. Both
`InfeasibleError` and `UnboundedError` derive from `SolverError`.

`LinearProgram.solution_json()` returns the solution as a compact JSON
object with sorted keys, and raises `SolutionUnavailableError` if the
program has not been solved.

`parse` raises `ParseError` (a `ValueError`) for malformed input, such as
invalid JSON, an unknown comparison operator, more constraints than declared,
or a right-hand side that is not a number.

### Working with the model

`lptools.model.LinearProgram` is a dataclass holding the objective, the
constraint matrix, the comparisons, the right-hand sides and the current
form (`LPState`). It can be normalised in place:

- `to_canonical_form()` turns the problem into a maximisation whose
  constraints are all `<=`: negative right-hand sides are negated first,
  `>=`/`>` constraints are multiplied by -1, and each equality becomes a
  pair of inequalities.
- `to_slack_form()` adds a slack variable (`s1`, `s2`, ...) per constraint
  so that every constraint becomes an equality.

`solve` works on the program in place, so afterwards it holds the slack form
(with its `state` reset to `UNDEFINED`).

`lptools.parsing.convert_lp_to_json(lp)` writes a program back out in the
same JSON shape, including any slack variables, which is handy for
inspecting each step. `equation_to_string` and `comparison_to_string` render
single equations and operators.

`lptools.solver.SimplexTable` exposes the individual simplex steps
(`initialize_tableau`, `find_entering_variable`, `find_leaving_variable`,
`perform_pivot`, `extract_solution`) and prints as a formatted tableau.

### Limitations

- The solver starts from the slack basis and has no first phase. Any
  problem whose canonical form has a negative right-hand side, which includes
  every `=`, `>=` or `>` constraint with a positive right-hand side, is
  reported as `InfeasibleError`, even if a feasible solution exists.
- Strict inequalities `<` and `>` are treated as `<=` and `>=`.
- There is no command-line program; the package is used from Python.

## Running the tests

```
pip install .[test]
pytest
```