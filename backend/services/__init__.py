"""
Runtime services around the game engine: tick driver, input mapping, session.
"""
