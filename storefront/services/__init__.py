# Services Module
from .money import format_money, round_money, to_decimal

__all__ = ["format_money", "round_money", "to_decimal"]
