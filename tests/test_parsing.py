import json

import pytest

from lptools.model import Comparison, LinearProgram, Objective
from lptools.parsing import (
    ParseError,
    comparison_to_string,
    convert_lp_to_json,
    equation_to_string,
    parse,
)

EXAMPLE = json.dumps(
    {
        "numberOfVariables": 3,
        "numberOfConstraints": 3,
        "objectiveFunction": {"objective": "minimize", "equasion": "4*x1 - 5*x2 + 3*x3"},
        "constraints": [
            "5*x2 < 200",
            "4*x2 + 3*x3 < 430",
            "12*x1 + 4*x2 + 3*x3 < 430",
        ],
    }
)

EXAMPLE2 = json.dumps(
    {
        "numberOfVariables": 2,
        "numberOfConstraints": 3,
        "objectiveFunction": {"objective": "maximize", "equasion": "3*x1 + 5*x2"},
        "constraints": ["x1 <= 4", "2*x2 <= 12", "3*x1 + 2*x2 <= 18"],
    }
)

EXAMPLE3 = json.dumps(
    {
        "numberOfVariables": 2,
        "numberOfConstraints": 2,
        "objectiveFunction": {"objective": "Minimize", "equasion": "2x + 3y"},
        "constraints": ["x + y >= 10", "2x + y <= 20"],
    }
)


def test_parse_example():
    lp = parse(EXAMPLE)
    assert lp.nb_variables == 3
    assert lp.nb_constraints == 3
    assert lp.objective == Objective.MINIMIZE
    assert lp.obj_coeff == [4, -5, 3]
    assert lp.constraint_coeff == [[0, 5, 0], [0, 4, 3], [12, 4, 3]]
    assert lp.rhs == [200, 430, 430]
    assert lp.comparisons == [Comparison.LO, Comparison.LO, Comparison.LO]


def test_parse_example2():
    lp = parse(EXAMPLE2)
    assert lp.nb_variables == 2
    assert lp.nb_constraints == 3
    assert lp.objective == Objective.MAXIMIZE
    assert lp.obj_coeff == [3, 5]
    assert lp.constraint_coeff == [[1, 0], [0, 2], [3, 2]]
    assert lp.rhs == [4, 12, 18]
    assert lp.comparisons == [Comparison.LE, Comparison.LE, Comparison.LE]


def test_parse_example3():
    lp = parse(EXAMPLE3)
    assert lp.nb_variables == 2
    assert lp.nb_constraints == 2
    assert lp.objective == Objective.MINIMIZE
    assert lp.obj_coeff == [2, 3]
    assert lp.constraint_coeff == [[1, 1], [2, 1]]
    assert lp.rhs == [10, 20]
    assert lp.comparisons == [Comparison.BE, Comparison.LE]


def test_variable_names_in_order_of_appearance():
    lp = parse(EXAMPLE3)
    assert lp.variable_names == ["x", "y"]


def test_equality_and_greater_operators():
    data = json.dumps(
        {
            "numberOfVariables": 1,
            "numberOfConstraints": 2,
            "objectiveFunction": {"objective": "maximize", "equasion": "a"},
            "constraints": ["a = 3", "-1.5*a > -2.5"],
        }
    )
    lp = parse(data)
    assert lp.comparisons == [Comparison.EQ, Comparison.BI]
    assert lp.constraint_coeff == [[1.0], [-1.5]]
    assert lp.rhs == [3.0, -2.5]


def test_invalid_json_raises():
    with pytest.raises(ParseError):
        parse("{not json")


def test_invalid_operator_raises():
    data = json.dumps(
        {
            "numberOfVariables": 1,
            "numberOfConstraints": 1,
            "objectiveFunction": {"objective": "maximize", "equasion": "x"},
            "constraints": ["x ! 5"],
        }
    )
    with pytest.raises(ParseError, match="invalid comparison operator"):
        parse(data)


def test_invalid_rhs_raises():
    data = json.dumps(
        {
            "numberOfVariables": 1,
            "numberOfConstraints": 1,
            "objectiveFunction": {"objective": "maximize", "equasion": "x"},
            "constraints": ["x <= abc"],
        }
    )
    with pytest.raises(ParseError):
        parse(data)


def test_too_many_variables_raises():
    data = json.dumps(
        {
            "numberOfVariables": 1,
            "numberOfConstraints": 0,
            "objectiveFunction": {"objective": "maximize", "equasion": "x + y"},
            "constraints": [],
        }
    )
    with pytest.raises(ParseError):
        parse(data)


def test_too_many_constraints_raises():
    data = json.dumps(
        {
            "numberOfVariables": 1,
            "numberOfConstraints": 1,
            "objectiveFunction": {"objective": "maximize", "equasion": "x"},
            "constraints": ["x <= 1", "x <= 2"],
        }
    )
    with pytest.raises(ParseError):
        parse(data)


def test_wrong_field_type_raises():
    with pytest.raises(ParseError):
        parse('{"numberOfVariables": "two"}')


def test_equation_to_string_with_slack_names():
    assert equation_to_string([1, 0, -1.5, 2], ["x"], ["s1", "s2", "s3"]) == (
        "1*x -1.5*s2 +2*s3"
    )


def test_equation_to_string_ignores_unnamed_terms():
    assert equation_to_string([1, 2], ["x"], []) == "1*x"


def test_equation_to_string_number_formatting():
    assert equation_to_string([0.1, 1e21], ["a", "b"], []) == (
        "0.1*a +1000000000000000000000*b"
    )


def test_equation_to_string_all_zero():
    assert equation_to_string([0, 0], ["a", "b"], []) == ""


@pytest.mark.parametrize(
    "comp, text",
    [
        (Comparison.EQ, "="),
        (Comparison.LO, "<"),
        (Comparison.LE, "<="),
        (Comparison.BI, ">"),
        (Comparison.BE, ">="),
    ],
)
def test_comparison_to_string(comp, text):
    assert comparison_to_string(comp) == text


def test_comparison_to_string_invalid():
    with pytest.raises(ParseError, match="7"):
        comparison_to_string(7)


def test_convert_lp_to_json_exact_output():
    expected = (
        "{\n"
        '  "numberOfVariables": 2,\n'
        '  "numberOfConstraints": 3,\n'
        '  "objectiveFunction": {\n'
        '    "objective": "maximize",\n'
        '    "equasion": "3*x1 +5*x2"\n'
        "  },\n"
        '  "constraints": [\n'
        '    "1*x1 <= 4",\n'
        '    "2*x2 <= 12",\n'
        '    "3*x1 +2*x2 <= 18"\n'
        "  ]\n"
        "}\n"
    )
    assert convert_lp_to_json(parse(EXAMPLE2)) == expected


@pytest.mark.parametrize("source", [EXAMPLE, EXAMPLE2, EXAMPLE3])
def test_round_trip(source):
    original = parse(source)
    again = parse(convert_lp_to_json(original))
    assert again.objective == original.objective
    assert again.obj_coeff == original.obj_coeff
    assert again.constraint_coeff == original.constraint_coeff
    assert again.rhs == original.rhs
    assert again.comparisons == original.comparisons


def test_convert_slack_form_includes_slack_names():
    lp = LinearProgram(
        nb_constraints=1,
        nb_variables=1,
        variable_names=["x"],
        objective=Objective.MAXIMIZE,
        obj_coeff=[1.0],
        comparisons=[Comparison.LE],
        constraint_coeff=[[2.0]],
        rhs=[4.0],
    )
    lp.to_slack_form()
    document = json.loads(convert_lp_to_json(lp))
    assert document["numberOfVariables"] == 2
    assert document["objectiveFunction"]["equasion"] == "1*x"
    assert document["constraints"] == ["2*x +1*s1 = 4"]
    assert document["objectiveFunction"]["objective"] == "maximize"