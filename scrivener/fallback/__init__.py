"""
Local response engines used when the remote generator is unavailable.
"""
from scrivener.fallback.conversation import converse
from scrivener.fallback.feedback import feedback
from scrivener.fallback.rewrite import rewrite

__all__ = [
    'converse',
    'feedback',
    'rewrite',
]
