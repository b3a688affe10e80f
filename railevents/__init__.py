"""
railevents: static site builder for UK railway modelling events.
"""
