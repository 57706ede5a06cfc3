"""
Vocabulary trainer: spaced-repetition review of English words with Russian translations
"""

__version__ = "0.1.0"
