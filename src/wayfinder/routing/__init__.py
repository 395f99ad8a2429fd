"""Routing: the dispatcher, its route strategies, and the handler protocol.

Routes are registered per HTTP method; the most recent registration is
checked first.
"""
