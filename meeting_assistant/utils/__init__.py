"""
Prompt rendering, insight and summary helpers.
"""
