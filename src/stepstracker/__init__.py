"""Watch-face style step tracker with a spiral goal picker."""

__version__ = "0.1.0"
