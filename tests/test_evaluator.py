import pytest

from reel.errors import EvaluationFailure
from reel.evaluation.evaluator import calc, is_truthy
from reel.reader.parser import read_expression
from reel.types.nil import Nil
from reel.types.signal import Quit
from reel.types.value import Call, If, Lambda, Macro, Str


def calc_src(source, machine):
    return calc(read_expression(source, machine), machine)


@pytest.mark.parametrize("value,expected", [
    (Nil, False),
    (Str(""), False),
    (Str(" "), True),
    (Str("0"), True),
    (Lambda("x"), True),
])
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


@pytest.mark.parametrize("node", [Nil, Str("abc"), Lambda("+.")])
def test_literals_evaluate_to_themselves(node, mock_machine):
    assert calc(node, mock_machine) == node


def test_if_takes_else_for_nil(mock_machine):
    result = calc_src(" ? () 'a' 'b' ", mock_machine)
    assert result == Str("b")
    assert str(result) == "b"


def test_if_takes_else_for_empty_string(mock_machine):
    assert calc_src("? '' 'a' 'b'", mock_machine) == Str("b")


def test_if_takes_then_for_text(mock_machine):
    assert calc_src("? 'x' 'a' 'b'", mock_machine) == Str("a")


def test_if_evaluates_only_the_taken_branch(mock_machine):
    calc_src("? 'yes' @fx-then~ @fx-else~", mock_machine)
    assert mock_machine.effects == ["fx-then"]

    mock_machine.effects.clear()
    calc_src("? () @fx-then~ @fx-else~", mock_machine)
    assert mock_machine.effects == ["fx-else"]


def test_if_predicate_can_be_a_call(mock_machine):
    # the mock echoes its arguments, so no arguments means Nil
    assert calc_src("? (`p') 'a' 'b'", mock_machine) == Str("b")
    assert calc_src("? (`p' 'z') 'a' 'b'", mock_machine) == Str("a")


def test_macro_expands_to_lambda(mock_machine):
    assert calc(Macro("fx-one"), mock_machine) == Lambda("fx-one")


def test_continue_macro_yields_nil(mock_machine):
    assert calc(Macro("help"), mock_machine) is Nil


def test_quit_macro_propagates(mock_machine):
    with pytest.raises(Quit):
        calc(Macro("quit"), mock_machine)


def test_quit_inside_if_stops_evaluation(mock_machine):
    with pytest.raises(Quit):
        calc_src("? @quit~ @fx-a~ @fx-b~", mock_machine)
    assert mock_machine.effects == []


def test_unknown_macro_fails(mock_machine):
    with pytest.raises(EvaluationFailure) as info:
        calc(Macro("nope"), mock_machine)
    assert "nope" in str(info.value)


def test_call_requires_callable(mock_machine):
    with pytest.raises(EvaluationFailure) as info:
        calc_src("('abc' 'x')", mock_machine)
    assert str(info.value) == "need callable here, found abc instead"
    assert mock_machine.calls == []


def test_call_of_nil_names_nil(mock_machine):
    with pytest.raises(EvaluationFailure) as info:
        calc(Call(Nil, ()), mock_machine)
    assert "found nil instead" in str(info.value)


def test_call_receives_raw_arguments(mock_machine):
    result = calc_src("(`f' @fx-arg~ ? () 'a' 'b' (@fx-inner~ 'q'))", mock_machine)
    # no argument was evaluated: no macro side effects, displays unchanged
    assert mock_machine.effects == []
    assert result == Str("@fx-arg~ <if expression> (@fx-inner~ [ q ])")
    code, args = mock_machine.calls[0]
    assert code == "f"
    assert args == (Macro("fx-arg"), If(Nil, Str("a"), Str("b")), Call(Macro("fx-inner"), (Str("q"),)))


def test_call_through_macro_callee(mock_machine):
    assert calc_src("(@fx-callee~ 'x' 'y')", mock_machine) == Str("x y")
    assert mock_machine.effects == ["fx-callee"]


def test_failure_in_callee_short_circuits(mock_machine):
    with pytest.raises(EvaluationFailure):
        calc_src("(@nope~ @fx-a~)", mock_machine)
    assert mock_machine.calls == []


def test_machine_error_becomes_runtime_error(tape_machine):
    with pytest.raises(EvaluationFailure) as info:
        calc_src("(`<')", tape_machine)
    assert str(info.value) == "runtime error: failed to start machine: illegal pointer movement"
