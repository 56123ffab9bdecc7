import pytest

from ttgen.eval import Row, TruthTable, evaluate, generate, get_all_inputs
from ttgen.lexer import Paren, scan
from ttgen.parser import InvalidExpression, MalformedExpression, to_postfix

T, F = True, False


def results(expression):
    return [row.result for row in generate(expression).rows]


def test_get_all_inputs_order():
    assert list(get_all_inputs(2)) == [(T, T), (T, F), (F, T), (F, F)]
    assert list(get_all_inputs(0)) == [()]


def test_get_all_inputs_negative():
    with pytest.raises(ValueError):
        list(get_all_inputs(-1))


def test_conjunction():
    tt = generate('p ^ q')
    assert tt.variables == ('p', 'q')
    assert tt.rows == [
        Row((T, T), T), Row((T, F), F), Row((F, T), F), Row((F, F), F)]


def test_negation():
    tt = generate('!p')
    assert [row.values for row in tt.rows] == [(T,), (F,)]
    assert results('!p') == [F, T]


@pytest.mark.parametrize('expression, expected', [
    ('p v q', [T, T, T, F]),
    ('p -> q', [T, F, T, T]),
    ('p <-> q', [T, F, F, T]),
    ('p * q', [T, F, F, F]),
    ('p + q', [T, T, T, F]),
])
def test_binary_connectives(expression, expected):
    assert results(expression) == expected


def test_constants_only_give_one_row():
    tt = generate('1 ^ 0')
    assert tt.variables == ()
    assert tt.rows == [Row((), F)]
    assert results('T v F') == [T]


def test_rows_cover_every_assignment():
    tt = generate('a ^ b v c -> d')
    values = [row.values for row in tt.rows]
    assert len(values) == 2 ** 4
    assert len(set(values)) == len(values)


def test_repeated_variable_shares_value():
    assert results('p ^ !p') == [F, F]
    assert results('p v ~p') == [T, T]


def test_implication_groups_to_the_right():
    tt = generate('p -> q -> r')
    assert tt.rows[-1] == Row((F, F, F), T)


def test_precedence_in_evaluation():
    # p v (q ^ r)
    assert results('p v q ^ r') == [T, T, T, T, T, F, F, F]


def test_generate_is_idempotent():
    assert generate('(p -> q) ^ !r') == generate('(p -> q) ^ !r')


@pytest.mark.parametrize('expression', ['', '   ', '-'])
def test_nothing_to_evaluate(expression):
    assert generate(expression) is None


def test_invalid_expression():
    with pytest.raises(InvalidExpression):
        generate('p ^ ^ q')


@pytest.mark.parametrize('expression', ['((p', '()', '(p))'])
def test_malformed_expression(expression):
    with pytest.raises(MalformedExpression):
        generate(expression)


def test_evaluate_with_plain_mapping():
    postfix = to_postfix(scan('a ^ !b')[0])
    assert evaluate(postfix, {'a': T, 'b': F})
    assert not evaluate(postfix, {'a': T, 'b': T})


def test_evaluate_rejects_stray_parenthesis():
    with pytest.raises(MalformedExpression):
        evaluate([Paren(True)], {})


def test_assignments():
    tt = TruthTable.from_expr('p')
    assert list(tt.assignments()) == [{'p': T}, {'p': F}]
