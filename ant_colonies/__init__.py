"""Ant colony invasion simulator: random walkers destroying a tunnel graph."""
