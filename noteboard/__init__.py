"""
Post-it message board: board state, author colors, and card dragging.
"""
