# scripts/parse_passage.py
import json
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

from utils.passage_parser import parse_verses_from_passage

def parse_passage_file(book, chapter, passage_path):
    """Read a saved ESV text response and split it into verse records"""
    with open(passage_path, 'r', encoding='utf-8') as f:
        raw_passage = f.read()
    return parse_verses_from_passage(raw_passage, book, chapter)

def main(argv):
    if len(argv) != 4:
        print("Usage: python parse_passage.py <book> <chapter> <path_to_passage.txt>")
        return 1

    book, chapter, passage_path = argv[1], argv[2], argv[3]
    try:
        chapter = int(chapter)
    except ValueError:
        print(f"Chapter must be a number, got '{chapter}'")
        return 1

    verses = parse_passage_file(book, chapter, passage_path)
    if not verses:
        print(f"Unable to parse any verses for {book} {chapter}", file=sys.stderr)
        return 2

    print(json.dumps([verse.to_json() for verse in verses], indent=2, ensure_ascii=False))
    return 0

if __name__ == '__main__':
    sys.exit(main(sys.argv))
