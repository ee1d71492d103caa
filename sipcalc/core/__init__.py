"""Pure projection math. Nothing in this package performs I/O."""
