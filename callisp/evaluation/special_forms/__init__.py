"""Registry of special forms for the callisp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application, so a
special form cannot be shadowed by a binding of the same name.
"""

from callisp.types.symbol import Symbol
from callisp.evaluation.special_forms.define_form import define_form
from callisp.evaluation.special_forms.lambda_form import lambda_form
from callisp.evaluation.special_forms.if_form import if_form
from callisp.evaluation.special_forms.quote_form import quote_form

SPECIAL_FORMS = {
    Symbol("def"): define_form,
    Symbol("define"): define_form,
    Symbol("lambda"): lambda_form,
    Symbol("λ"): lambda_form,
    Symbol("if"): if_form,
    Symbol("quote"): quote_form,
}
