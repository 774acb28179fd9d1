"""Composition utilities: pipe() and chain()."""

from beaut.compose.pipe import Chain, chain, pipe

__all__ = [
    'Chain',
    'chain',
    'pipe',
]
