"""Service layer of the program compliance engine."""
