"""Occupancy model, cell arena, layout and payload codec."""
