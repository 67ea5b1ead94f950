"""HTTP surface for the chesscore engine."""
