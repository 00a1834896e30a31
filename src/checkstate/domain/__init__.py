"""Pure domain layer: values, ports and the reconciliation core."""
