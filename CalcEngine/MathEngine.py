# MathEngine.py
"""""
Core calculation engine for the Python Calculator.

Pipeline
--------
1) Lexer: converts a raw input string into a token list (see Lexer.py).
2) Contextualizer: resolves names against the environment, inserts implicit
   multiplication and folds runs of unary minus into a negation depth.
   Result: a flat list of expressions and the operators between them.
3) Reducer: folds the flat lists into one AST, highest precedence tier first.
4) Evaluator: walks the AST (Literal / BinOp / Call / Grouped / Negated).
5) Formatter: rounds the result for display using the user preferences.
"""""

import logging
import math

from . import config_manager as config_manager
from . import ScientificEngine
from . import error as E
from .Lexer import lex, format_number, NumberToken, OperatorToken, IdentifierToken, GroupToken, NegationToken
from .ScientificEngine import AngleMode, DEFAULT_ENVIRONMENT

logger = logging.getLogger(__name__)

# Precedence tiers (higher binds tighter)
ADDITIVE_TIER = 1
MULTIPLICATIVE_TIER = 2
EXPONENT_TIER = 3

Precedence = {
    "+": ADDITIVE_TIER,
    "-": ADDITIVE_TIER,
    "*": MULTIPLICATIVE_TIER,
    "/": MULTIPLICATIVE_TIER,
    "^": EXPONENT_TIER,
}


def apply_operator(operator, left_value, right_value):
    """Apply a binary operator with IEEE-754 float semantics."""
    if operator == '+':
        return left_value + right_value
    elif operator == '-':
        return left_value - right_value
    elif operator == '*':
        return left_value * right_value
    elif operator == '/':
        return ScientificEngine.divide(left_value, right_value)
    elif operator == '^':
        return ScientificEngine.power(left_value, right_value)
    else:
        raise E.MathError(E.ERROR_MESSAGES["9999"] + f"unknown operator {operator!r}", code="9999")


# -----------------------------
# AST node types
# -----------------------------

class Literal:
    """AST node for a numeric literal (or a resolved constant)."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self, mode, environment):
        return self.value

    def __repr__(self):
        return f"Literal({format_number(self.value)})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self, mode, environment):
        # Left operand is always evaluated first
        left_value = self.left.evaluate(mode, environment)
        right_value = self.right.evaluate(mode, environment)
        return apply_operator(self.operator, left_value, right_value)

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class Call:
    """AST node for a single-argument function call."""
    def __init__(self, function_name, argument):
        self.function_name = function_name
        self.argument = argument

    def evaluate(self, mode, environment):
        argument_value = self.argument.evaluate(mode, environment)
        binding = environment.get(self.function_name)
        if binding is None or not binding.is_function:
            raise E.NonFunction(self.function_name)
        return binding.function(argument_value, mode)

    def __repr__(self):
        return f"Call({self.function_name!r}, {self.argument})"


class Grouped:
    """AST node for a parenthesized sub-expression."""
    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, mode, environment):
        return self.expression.evaluate(mode, environment)

    def __repr__(self):
        return f"Grouped({self.expression})"


class Negated:
    """AST node for one layer of unary minus."""
    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, mode, environment):
        return -self.expression.evaluate(mode, environment)

    def __repr__(self):
        return f"Negated({self.expression})"


def negate(expression, depth):
    """Wrap `expression` in `depth` Negated layers."""
    for _ in range(depth):
        expression = Negated(expression)
    return expression


def strip_negation(expression):
    """Return (inner expression, number of Negated layers removed)."""
    depth = 0
    while isinstance(expression, Negated):
        expression = expression.expression
        depth += 1
    return expression, depth


# -----------------------------
# Contextualizer
# -----------------------------

def contextualize(tokens, environment=DEFAULT_ENVIRONMENT):
    """Turn a token list into (expressions, operators).

    Implicit multiplication is inserted whenever an operand follows another
    operand, which shows up as len(expressions) != len(operators).
    """
    expressions = []
    operators = []

    negation_depth = 0
    function_name = None
    last_op = False
    last_operand = False  # closing group or constant

    def push_operand(expression):
        if len(expressions) != len(operators):
            operators.append('*')
        expressions.append(expression)

    for token in tokens:
        if isinstance(token, NumberToken) and function_name is None and \
                (last_op or last_operand or not expressions):
            push_operand(negate(Literal(token.value), negation_depth))
            negation_depth = 0
            last_op = False
            last_operand = False

        elif isinstance(token, NegationToken) and function_name is None:
            negation_depth += 1

        elif isinstance(token, OperatorToken) and function_name is None and not last_op:
            operators.append(token.operator)
            last_op = True
            last_operand = False

        elif isinstance(token, GroupToken):
            sub_expression = build_tree(token.tokens, environment)
            if function_name is not None:
                node = Call(function_name, sub_expression)
                function_name = None
            else:
                node = Grouped(sub_expression)
            push_operand(negate(node, negation_depth))
            negation_depth = 0
            last_op = False
            last_operand = True

        elif isinstance(token, IdentifierToken) and function_name is None:
            binding = environment.get(token.name)
            if binding is None:
                raise E.UndefinedIdent(token.name)
            if binding.is_function:
                function_name = token.name
            else:
                push_operand(negate(Literal(binding.value), negation_depth))
                negation_depth = 0
                last_op = False
                last_operand = True

        else:
            raise E.UnexpectedToken(token)

    if len(expressions) - len(operators) != 1:
        raise E.ParserEOF()

    return expressions, operators


# -----------------------------
# Reducer
# -----------------------------

def _reduce_at(expressions, operators, index, is_exponent):
    """Fold expressions[index] operators[index] expressions[index + 1] into one BinOp."""
    if index + 1 >= len(expressions) or index >= len(operators):
        return
    operator = operators.pop(index)
    left = expressions.pop(index)
    right = expressions.pop(index)
    if is_exponent:
        # -2^2 is -(2^2): negation binds looser than '^'
        left, depth = strip_negation(left)
        node = negate(BinOp(left, operator, right), depth)
    else:
        node = BinOp(left, operator, right)
    expressions.insert(index, node)


def reduce_tree(expressions, operators):
    """Reduce the flat lists to a single expression, highest tier first."""
    expressions = list(expressions)
    operators = list(operators)

    if len(expressions) != len(operators) + 1:
        raise E.ParserEOF()

    for tier in (EXPONENT_TIER, MULTIPLICATIVE_TIER, ADDITIVE_TIER):
        # Each fold shifts the later positions one to the left
        positions = [b for b, operator in enumerate(operators) if Precedence[operator] == tier]
        for folded, position in enumerate(positions):
            _reduce_at(expressions, operators, position - folded, tier == EXPONENT_TIER)

    if len(expressions) != 1 or operators:
        raise E.ParserEOF()

    return expressions[0]


def build_tree(tokens, environment=DEFAULT_ENVIRONMENT):
    """Contextualize and reduce a token list into one AST."""
    expressions, operators = contextualize(tokens, environment)
    return reduce_tree(expressions, operators)


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(problem, mode=AngleMode.RADIANS, environment=DEFAULT_ENVIRONMENT):
    """Main API: lex → contextualize → reduce → evaluate.

    Returns the float result. Every failure is raised as an E.MathError whose
    `message` is the text to show the user and whose `equation` is `problem`.
    """
    try:
        tokens = lex(problem)
        logger.debug("Tokens: %s", tokens)
        finaler_baum = build_tree(tokens, environment)
        logger.debug("Final AST: %s", finaler_baum)
        return finaler_baum.evaluate(mode, environment)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ArithmeticError, ValueError, TypeError, RecursionError) as e:
        raise E.MathError(message=E.ERROR_MESSAGES["9999"] + str(e), code="9999", equation=problem)


def round_to_places(value, places):
    """Round `value` to `places` decimal places, ties away from zero."""
    return ScientificEngine.round_half_away(value, places)


def cleanup(ergebnis, decimal_places):
    """Round for display.

    Returns:
        (rounded_value, rounding_flag)
    where rounding_flag indicates whether rounding changed the value.
    """
    gerundetes_ergebnis = round_to_places(ergebnis, decimal_places)
    rounding = math.isfinite(ergebnis) and gerundetes_ergebnis != ergebnis
    return gerundetes_ergebnis, rounding


def calculate(problem, mode=None):
    """Evaluate with the user preferences and render the result string.

    Uses the configured angle mode unless `mode` is given, rounds to the
    configured decimal places and marks rounded results with '≈'.
    """
    settings = config_manager.load_setting_value("all")
    if mode is None:
        mode = AngleMode.from_setting(settings["angle_mode"])
    decimal_places = config_manager.decimal_places(settings)

    ergebnis = evaluate(problem, mode)
    ergebnis, rounding = cleanup(ergebnis, decimal_places)
    ungefaehr_zeichen = "\u2248"  # "≈"

    if rounding:
        return f"{ungefaehr_zeichen} " + format_number(ergebnis)
    return "= " + format_number(ergebnis)

