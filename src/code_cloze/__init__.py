"""Turn source files into syntax-highlighted cloze flashcards for Anki."""

__version__ = "0.1.0"
