"""Football league power rankings, game predictions and Game of the Week."""

__version__ = "0.1.0"
