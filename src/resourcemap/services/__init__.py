"""Service layer: operations returning OperationResult for the CLI and callers."""
