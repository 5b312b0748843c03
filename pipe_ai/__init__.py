"""
pipe-ai pipes text from a file or stdin into an AI provider, together with a prompt
given inline, loaded from a file, written in an editor or typed at the terminal.
"""

__version__ = "1.0.0"
