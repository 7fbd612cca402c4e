"""Selector strategies, one per terminal capability tier."""

from .base import SelectorStrategy
from .full_screen import FullScreenSelector
from .keyboard import KeyboardSelector
from .numbered import NumberedSelector

__all__ = ["FullScreenSelector", "KeyboardSelector", "NumberedSelector", "SelectorStrategy"]
