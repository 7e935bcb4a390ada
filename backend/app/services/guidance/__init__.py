"""
Guidance Services

Fixed-text answers for credit education questions and business credit
building, picked by ordered keyword rules.
"""

from .education import answer_credit_question, classify_question
from .business_credit import business_credit_guidance, classify_business_question, missing_foundation_steps

__all__ = [
    'answer_credit_question',
    'classify_question',
    'business_credit_guidance',
    'classify_business_question',
    'missing_foundation_steps',
]
