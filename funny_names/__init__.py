"""
Funny Names: a quota-gated submission form for a remote name list.
"""
