"""Input definition storage layer.

This package persists input definition descriptors and converts
schemas between the stored binary form and the JSON transport shape.
"""
