"""
Lead feature: submissions joined with agent follow-ups, plus lead writes.
"""
