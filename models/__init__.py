# This file makes the models directory a Python package 
from .verse import ChapterVerse

__all__ = [
    'ChapterVerse',
]
