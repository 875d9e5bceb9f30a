# routes/bible.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
import logging
from utils.auth import token_required
from utils.esv_client import (
    EsvPassageError,
    EsvUnavailableError,
    EsvUpstreamError,
    fetch_chapter_passage,
)
from utils.passage_parser import parse_verses_from_passage
from schemas.chapter_schemas import ChapterQuery, ChapterRead

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)

def _invalid_parameter(error):
    field = error.errors()[0]['loc'][0]
    return jsonify({"error": f"Invalid {field} parameter"}), 400

@bible_bp.route('/esv/chapter', methods=['GET'])
@token_required
def get_esv_chapter(current_user_id):
    """
    Returns one chapter of the ESV split into verses, each with the section
    heading that precedes it (if any).
    """
    api_key = current_app.config.get('ESV_API_KEY')
    if not api_key:
        logger.error("ESV_API_KEY not configured.")
        return jsonify({"error": "ESV API unavailable"}), 503

    try:
        query = ChapterQuery(
            book=request.args.get('book', ''),
            chapter=request.args.get('chapter', '')
        )
    except ValidationError as e:
        logger.info(f"Rejected chapter request from {current_user_id}: {e.errors()[0]['msg']}")
        return _invalid_parameter(e)

    try:
        passage = fetch_chapter_passage(
            query.book,
            query.chapter,
            api_key,
            api_url=current_app.config['ESV_API_URL'],
            timeout=current_app.config['ESV_TIMEOUT_SECONDS']
        )
    except EsvUnavailableError:
        return jsonify({"error": "ESV API unavailable"}), 503
    except EsvUpstreamError as e:
        return jsonify({"error": str(e)}), 502
    except EsvPassageError:
        logger.error(f"ESV returned no passage for {query.book} {query.chapter}")
        return jsonify({"error": "Unable to parse ESV passage"}), 502
    except Exception as e:
        logger.error(f"Error loading {query.book} {query.chapter}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to load chapter"}), 500

    verses = parse_verses_from_passage(passage.passage, query.book, query.chapter)
    if not verses:
        # The provider answered, so this is a format change rather than an outage
        logger.error(f"No verses parsed from ESV passage for {query.book} {query.chapter}")
        return jsonify({"error": "Unable to parse ESV verses"}), 502

    logger.info(f"Parsed {len(verses)} verses for {query.book} {query.chapter}")
    payload = ChapterRead.from_passage(
        query.book,
        query.chapter,
        verses,
        canonical=passage.canonical,
        attribution=passage.copyright
    )
    return jsonify(payload.to_json())
