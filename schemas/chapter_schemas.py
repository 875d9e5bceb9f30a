import re
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')

class ChapterQuery(BaseModel):
    book: str = Field(..., min_length=1, pattern=r"^[0-9A-Za-z\s'-]+$")
    chapter: int = Field(..., ge=1, le=200)

    @field_validator('book', mode='before')
    @classmethod
    def normalize_book(cls, value):
        if not isinstance(value, str):
            raise ValueError('book must be a string')
        return ' '.join(value.split())

    @field_validator('chapter', mode='before')
    @classmethod
    def parse_chapter(cls, value):
        # Accept the leading integer of the raw query string ("3abc" -> 3)
        if isinstance(value, str):
            match = LEADING_INT_RE.match(value)
            if not match:
                raise ValueError('chapter must be a number')
            return int(match.group(1))
        return value

class ChapterVerseRead(BaseModel):
    verse_number: int = Field(..., alias='verseNumber')
    reference: str
    text: str
    heading: Optional[str] = None

class ChapterRead(BaseModel):
    book: str
    chapter: int
    canonical: str
    verses: List[ChapterVerseRead]
    attribution: str

    @classmethod
    def from_passage(cls, book, chapter, verses, canonical=None, attribution=None):
        """Build the response payload, falling back when the provider metadata is blank"""
        return cls(
            book=book,
            chapter=chapter,
            canonical=(canonical or '').strip() or f"{book} {chapter}",
            verses=[ChapterVerseRead.model_validate(verse.to_json()) for verse in verses],
            attribution=(attribution or '').strip() or "(ESV)"
        )

    def to_json(self):
        return self.model_dump(by_alias=True)
