# models/verse.py
from dataclasses import dataclass
from typing import Optional


@dataclass
class ChapterVerse:
    book: str
    chapter: int
    verse_number: int
    text: str
    heading: Optional[str] = None

    @property
    def reference(self):
        return f"{self.book} {self.chapter}:{self.verse_number}"

    def to_json(self):
        return {
            "verseNumber": self.verse_number,
            "reference": self.reference,
            "text": self.text,
            "heading": self.heading
        }
