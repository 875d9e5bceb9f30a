# utils/passage_parser.py
import logging
import re
from collections import namedtuple

from models.verse import ChapterVerse

logger = logging.getLogger(__name__)

MAX_HEADING_LENGTH = 120

VERSE_MARKER_RE = re.compile(r'\[([0-9]+)\]')
LEADING_NUMBER_RE = re.compile(r'^([0-9]+)\s+')
SENTENCE_END_RE = re.compile(r'[,.;:!?]$')
HEADING_RE = re.compile(r'^[A-Z0-9][A-Za-z0-9\'‘’"“”,\-\s()]+$')
WHITESPACE_RE = re.compile(r'\s+')

VerseMarker = namedtuple('VerseMarker', ['number', 'start', 'end'])


def normalize_passage(raw_passage, version='ESV'):
    """Clean a raw passage so verse markers can be scanned.

    Strips carriage returns and the trailing short copyright, e.g. "(ESV)",
    then rewrites a bare leading verse number ("1 In the...") into the
    bracketed "[1] " form the rest of the passage uses.
    """
    if not raw_passage:
        return ''
    cleaned = raw_passage.replace('\r', '')
    if version:
        copyright_re = re.compile(r'\s*\(' + re.escape(version) + r'\)\s*$', re.IGNORECASE)
        cleaned = copyright_re.sub('', cleaned)
    cleaned = cleaned.strip()
    return LEADING_NUMBER_RE.sub(r'[\1] ', cleaned, count=1)


def find_verse_markers(text):
    """Return every [N] marker in text order as VerseMarker(number, start, end)"""
    return [
        VerseMarker(int(match.group(1)), match.start(), match.end())
        for match in VERSE_MARKER_RE.finditer(text)
    ]


def looks_like_heading(line):
    """Section headings are short, unpunctuated, title-like lines."""
    trimmed = line.strip()
    if not trimmed:
        return False
    if len(trimmed) > MAX_HEADING_LENGTH:
        return False
    if SENTENCE_END_RE.search(trimmed):
        return False
    return HEADING_RE.match(trimmed) is not None


def normalize_heading(text):
    if not text:
        return None
    normalized = WHITESPACE_RE.sub(' ', text).strip()
    return normalized or None


def _clean_verse_text(parts):
    joined = WHITESPACE_RE.sub(' ', ' '.join(parts))
    return VERSE_MARKER_RE.sub('', joined).strip()


def _split_trailing_headings(chunk):
    lines = [line.strip() for line in chunk.split('\n')]
    lines = [line for line in lines if line]

    # Headings for the next verse sit at the end of this verse's chunk
    trailing_headings = []
    while lines and looks_like_heading(lines[-1]):
        trailing_headings.insert(0, lines.pop())
    return lines, trailing_headings


def parse_verses_from_passage(raw_passage, book, chapter, version='ESV'):
    """Split a plain-text passage into ChapterVerse records.

    Verse numbers are the inline [N] markers. A heading line found at the
    end of one verse's text is attached to the verse that follows it; text
    before the first marker is the heading of the first verse. Verses are
    returned in the order their markers appear. An empty list means the
    passage could not be parsed.
    """
    cleaned = normalize_passage(raw_passage, version=version)
    if not cleaned:
        return []

    markers = find_verse_markers(cleaned)
    if not markers:
        return []

    pending_heading = normalize_heading(cleaned[:markers[0].start])
    verses = []
    dropped = []

    for index, marker in enumerate(markers):
        content_end = markers[index + 1].start if index + 1 < len(markers) else len(cleaned)
        lines, trailing_headings = _split_trailing_headings(cleaned[marker.end:content_end])

        text = _clean_verse_text(lines)
        if not text and trailing_headings:
            # Every line looked like a heading; the first one is the verse itself
            text = _clean_verse_text(trailing_headings[:1])
            trailing_headings = trailing_headings[1:]
        if not text:
            dropped.append(marker.number)
            continue

        verses.append(ChapterVerse(
            book=book,
            chapter=chapter,
            verse_number=marker.number,
            text=text,
            heading=pending_heading,
        ))
        pending_heading = normalize_heading(' '.join(trailing_headings))

    if dropped:
        logger.debug(f"Dropped empty verses {dropped} while parsing {book} {chapter}")
    return verses
