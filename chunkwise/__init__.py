"""
chunkwise - Lexical chunk lesson assembly and validation.

Turns a handful of target-language phrases (with translations, distractors
and usage contexts) into a render-ready, validated interactive lesson.
"""

__version__ = "0.1.0"
