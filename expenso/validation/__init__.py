"""Input validation package."""

from expenso.validation.validator import TransactionValidator, parse_amount

__all__ = ["TransactionValidator", "parse_amount"]
