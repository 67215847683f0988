"""DocGate - permission-checked access to a document store."""

__version__ = "0.1.0"
