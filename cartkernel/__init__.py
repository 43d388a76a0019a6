"""cartkernel - undoable shopping cart built from small behavioral blocks."""

__version__ = "0.1.0"
