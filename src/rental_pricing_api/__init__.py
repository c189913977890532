"""HTTP adapter exposing the rental pricing engine."""
