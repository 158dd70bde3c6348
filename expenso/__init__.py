"""
Expenso - Source Package

A personal finance tracker: record income and expenses, see balances and
spending charts, and read rule-based insights (with optional friendly
roasting) about spending habits.

DESIGN PRINCIPLES:
1. Aggregations are pure and deterministic
2. Insight texts come from fixed templates, never from a model
3. Nothing reaches the store without passing validation
4. Every step must be auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expenso Team"
