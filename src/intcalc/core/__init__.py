"""Core parsing and evaluation pipeline for intcalc."""
