"""Pure domain layer: values, invoice input model and boundary validation."""
