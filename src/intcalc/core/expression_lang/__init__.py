"""
intcalc expression language.

Tokenizer, parser, and evaluator for integer arithmetic with variables.

Usage:
    from intcalc.core.context import EvaluationContext
    from intcalc.core.expression_lang import evaluate, parse_expr

    ctx = EvaluationContext()
    evaluate(parse_expr("x = 5"), ctx)
    result = evaluate(parse_expr("x + 1"), ctx)
    # result == 6
"""

from intcalc.core.expression_lang.evaluator import evaluate
from intcalc.core.expression_lang.parser import Associativity, parse_expr, parse_tokens

__all__ = ["Associativity", "evaluate", "parse_expr", "parse_tokens"]
