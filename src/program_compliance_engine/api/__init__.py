"""HTTP surface of the program compliance engine."""
