"""
docsearch/extractor.py

Pulls the plain text out of an XML document.

Every character-data fragment (element text and tails) is collected in
document order and the fragments are joined with a single space, so a word
ending one element never fuses with the word starting the next. The result
goes through ftfy to repair mojibake before it reaches the tokenizer.

Comments and processing instructions are ignored.
"""

import logging
import xml.etree.ElementTree as ET

from ftfy import fix_text

from docsearch.errors import Extracted, ExtractionFailed, ExtractionResult

logger = logging.getLogger(__name__)


def read_xml_text(path: str) -> str:
    """
    Return the concatenated character data of the XML file at `path`.
    Raises OSError / ET.ParseError on unreadable or malformed input.
    """
    root = ET.parse(path).getroot()
    fragments = [frag.strip() for frag in root.itertext()]
    return fix_text(" ".join(f for f in fragments if f))


def extract(path: str) -> ExtractionResult:
    """
    Extract the text of one document.

    Returns:
        Extracted(path, text) on success
        ExtractionFailed(path, reason) if the file can't be read or parsed
    """
    try:
        text = read_xml_text(path)
    except ET.ParseError as e:
        return ExtractionFailed(path, f"malformed XML: {e}")
    except UnicodeDecodeError as e:
        return ExtractionFailed(path, f"undecodable content: {e}")
    except OSError as e:
        return ExtractionFailed(path, f"unreadable: {e.strerror or e}")
    logger.debug("[Extractor] %s -> %d chars", path, len(text))
    return Extracted(path, text)
