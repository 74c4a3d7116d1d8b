"""Human and JSON rendering of OperationResult."""
